# tests/unit/trigger/conftest.py
"""Shared fixtures for trigger module unit tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

# Disable Langfuse for unit tests
os.environ["LANGFUSE_ENABLED"] = "0"

from stance_rag.session.state import ClarificationState  # noqa: E402


def make_chat_model(content=None, side_effect=None):
    """Mock chat model: llm.bind(...) returns a runnable whose ainvoke yields ``content``."""
    llm = MagicMock()
    bound = MagicMock()
    if side_effect is not None:
        bound.ainvoke = AsyncMock(side_effect=side_effect)
    else:
        bound.ainvoke = AsyncMock(return_value=AIMessage(content=content))
    llm.bind = MagicMock(return_value=bound)
    llm.bound = bound
    return llm


@pytest.fixture
def chat_model_factory():
    return make_chat_model


@pytest.fixture
def awaiting_state():
    return ClarificationState(is_awaiting_clarification=True, is_ready_for_search=False)


@pytest.fixture
def ready_state():
    return ClarificationState(is_awaiting_clarification=False, is_ready_for_search=True)


@pytest.fixture
def pending_state():
    return ClarificationState()
