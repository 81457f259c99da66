# tests/unit/core/conftest.py
"""Shared fixtures for configuration and utility unit tests."""

import os

import pytest

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every STANCE_RAG_* / PINECONE_* variable for the test."""
    for key in list(os.environ):
        if key.startswith(("STANCE_RAG_", "PINECONE_")):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
