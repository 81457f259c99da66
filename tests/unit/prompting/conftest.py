# tests/unit/prompting/conftest.py
"""Shared fixtures for prompting module unit tests."""

import os

import pytest

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"

from stance_rag.session.state import EvidenceSnippet, SourceRef  # noqa: E402


@pytest.fixture
def evidence():
    return [
        EvidenceSnippet(
            content="  Bans raised scores by 6%.\n",
            score=0.91234,
            source_ref=SourceRef(document_name="lse-phones.pdf", page_numbers=(2, 3)),
            standpoint_tag="supporting",
        ),
        EvidenceSnippet(content="Teachers report fewer distractions.", score=0.8, source_ref=SourceRef(document_name="survey.pdf")),
        EvidenceSnippet(content="Untraceable claim.", score=0.75),
    ]
