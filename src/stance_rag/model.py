# src/stance_rag/model.py

import logging

from langchain.chat_models import init_chat_model

from stance_rag.constants import DEFAULT_CLASSIFIER_MAX_TOKENS

logger = logging.getLogger(__name__)


def get_default_model():
    """Chat model used to generate assistant replies in the case runner."""
    model = init_chat_model(
        model="gpt-4.1",
        temperature=0.7,
        max_tokens=1500,
    )
    return model


def get_classifier_model():
    """Small, deterministic model for search-trigger classification."""
    model = init_chat_model(
        model="gpt-4.1-mini",
        temperature=0.0,
        max_tokens=DEFAULT_CLASSIFIER_MAX_TOKENS,
    )
    return model
