# tests/unit/policy/conftest.py
"""Shared fixtures for conversation policy unit tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"

from stance_rag.config import SearchConfig  # noqa: E402
from stance_rag.retrieval.retriever import EvidenceRetriever  # noqa: E402
from stance_rag.session.session import initialize_session  # noqa: E402
from stance_rag.session.state import ClarificationState, EvidenceSnippet  # noqa: E402
from stance_rag.trigger.classifier import TriggerClassifier  # noqa: E402


@pytest.fixture
def backend_snippets():
    return [
        EvidenceSnippet(content="Bans raised scores.", score=0.93, standpoint_tag="supporting"),
        EvidenceSnippet(content="Phones aid safety.", score=0.88, standpoint_tag="opposing"),
        EvidenceSnippet(content="Neutral survey.", score=0.82),
        EvidenceSnippet(content="Weak match.", score=0.4),
    ]


@pytest.fixture
def mock_backend(backend_snippets):
    """Mock EvidenceBackend returning a fixed snippet list."""
    backend = MagicMock()
    backend.search = AsyncMock(return_value=backend_snippets)
    return backend


@pytest.fixture
def retriever(mock_backend):
    return EvidenceRetriever(mock_backend, SearchConfig())


@pytest.fixture
def keyword_classifier():
    """Classifier without a model: keyword rules decide."""
    return TriggerClassifier()


@pytest.fixture
def mock_classifier():
    """Classifier double with a scripted verdict."""
    classifier = MagicMock()
    classifier.should_trigger = AsyncMock(return_value=True)
    return classifier


@pytest.fixture
def suggestion_session():
    return initialize_session("Phones in schools", "supporting", "suggestion")


@pytest.fixture
def clarification_session():
    return initialize_session("Phones in schools", "supporting", "clarification")


@pytest.fixture
def awaiting_session(clarification_session):
    return clarification_session.model_copy(
        update={"clarification_state": ClarificationState(is_awaiting_clarification=True, is_ready_for_search=False)}
    )
