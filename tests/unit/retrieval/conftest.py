# tests/unit/retrieval/conftest.py
"""Shared fixtures for retrieval module unit tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"

from stance_rag.config import BackendConfig  # noqa: E402
from stance_rag.session.session import initialize_session  # noqa: E402
from stance_rag.session.state import EvidenceSnippet  # noqa: E402


def snippet(score, tag=None, content=None):
    return EvidenceSnippet(content=content or f"snippet {score}", score=score, standpoint_tag=tag)


@pytest.fixture
def make_snippet():
    return snippet


@pytest.fixture
def mixed_snippets():
    """Backend-ordered snippets across tags and scores."""
    return [
        snippet(0.95, "supporting", "s1"),
        snippet(0.90, "opposing", "o1"),
        snippet(0.85, None, "n1"),
        snippet(0.60, "supporting", "s2"),
        snippet(0.75, None, "n2"),
    ]


@pytest.fixture
def mock_backend():
    """Mock EvidenceBackend."""
    backend = MagicMock()
    backend.search = AsyncMock(return_value=[])
    return backend


@pytest.fixture
def supporting_session():
    return initialize_session("Phones in schools", "supporting", "suggestion")


@pytest.fixture
def backend_config():
    return BackendConfig(
        api_key="test-key",
        assistant_name="stance-assistant",
        host="https://assistant.example.test",
        api_version="2025-04",
    )


@pytest.fixture
def context_payload():
    """Sample assistant context response body."""
    return {
        "snippets": [
            {
                "type": "text",
                "content": "  Schools that banned phones saw higher scores.  ",
                "score": 0.92,
                "reference": {
                    "type": "pdf",
                    "file": {"id": "file-1", "name": "[supporting]lse-phones.pdf", "metadata": None},
                    "pages": [2, 3],
                },
            },
            {
                "type": "text",
                "content": "Phones help coordinate emergencies.",
                "score": 0.81,
                "reference": {
                    "type": "pdf",
                    "file": {"id": "file-2", "name": "parents.pdf", "metadata": {"stance": "opposing"}},
                    "pages": [7],
                },
            },
            {"type": "text", "content": "Unreferenced text.", "score": 0.7},
        ]
    }
