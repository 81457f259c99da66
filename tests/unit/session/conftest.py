# tests/unit/session/conftest.py
"""Shared fixtures for session module unit tests."""

import os

import pytest

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"

from stance_rag.session.session import initialize_session  # noqa: E402
from stance_rag.session.state import ActionTaken, EvidenceSnippet, SourceRef  # noqa: E402


@pytest.fixture
def suggestion_session():
    return initialize_session("Phones in schools", "supporting", "suggestion")


@pytest.fixture
def clarification_session():
    return initialize_session("Phones in schools", "opposing", "clarification")


@pytest.fixture
def sample_evidence():
    return [
        EvidenceSnippet(
            content="Phone bans improved test scores by 6%.",
            score=0.91,
            source_ref=SourceRef(document_id="f1", document_name="[supporting]lse-study.pdf", page_numbers=(3, 4)),
            standpoint_tag="supporting",
        ),
        EvidenceSnippet(content="Survey of 2,000 teachers.", score=0.78),
    ]


@pytest.fixture
def searched():
    return ActionTaken(searched=True)


@pytest.fixture
def asked():
    return ActionTaken(asked_clarification=True)
