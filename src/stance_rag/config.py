# src/stance_rag/config.py
"""Search configuration surface and its validation.

Validation never raises: every out-of-bounds value is reported as a
human-readable message so the UI can show all problems at once.
"""

from __future__ import annotations

import logging
import os
from typing import List

from pydantic import BaseModel, ConfigDict

from stance_rag.constants import (
    DEFAULT_BACKEND_API_VERSION,
    DEFAULT_BACKEND_HOST,
    DEFAULT_CLASSIFIER_MAX_TOKENS,
    DEFAULT_CLASSIFIER_TIMEOUT_SEC,
    DEFAULT_ENABLE_SCORE_FILTERING,
    DEFAULT_MIN_SIMILARITY_SCORE,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    DEFAULT_SNIPPET_SIZE,
    DEFAULT_TOP_K,
    DEFAULT_WARN_THRESHOLD,
    SNIPPET_SIZE_MAX,
    SNIPPET_SIZE_MIN,
    TOP_K_MAX,
    TOP_K_MIN,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "STANCE_RAG_"


class SearchConfig(BaseModel):
    """Tunables consumed (not owned) by the engine."""

    model_config = ConfigDict(frozen=True)

    top_k: int = DEFAULT_TOP_K
    snippet_size: int = DEFAULT_SNIPPET_SIZE

    enable_score_filtering: bool = DEFAULT_ENABLE_SCORE_FILTERING
    min_similarity_score: float = DEFAULT_MIN_SIMILARITY_SCORE
    warn_threshold: float = DEFAULT_WARN_THRESHOLD

    request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC
    classifier_timeout_sec: float = DEFAULT_CLASSIFIER_TIMEOUT_SEC
    classifier_max_tokens: int = DEFAULT_CLASSIFIER_MAX_TOKENS


class BackendConfig(BaseModel):
    """Connection settings for the evidence-search backend."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    assistant_name: str = ""
    host: str = DEFAULT_BACKEND_HOST
    api_version: str = DEFAULT_BACKEND_API_VERSION

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.assistant_name)


def validate_search_config(config: SearchConfig) -> List[str]:
    """Return one message per invalid setting (empty list when valid)."""
    problems: List[str] = []

    if not TOP_K_MIN <= config.top_k <= TOP_K_MAX:
        problems.append(f"top_k must be between {TOP_K_MIN} and {TOP_K_MAX} (got {config.top_k}).")
    if not SNIPPET_SIZE_MIN <= config.snippet_size <= SNIPPET_SIZE_MAX:
        problems.append(
            f"snippet_size must be between {SNIPPET_SIZE_MIN} and {SNIPPET_SIZE_MAX} tokens (got {config.snippet_size})."
        )
    if not 0.0 <= config.min_similarity_score <= 1.0:
        problems.append(f"min_similarity_score must be within [0, 1] (got {config.min_similarity_score}).")
    if not 0.0 <= config.warn_threshold <= 1.0:
        problems.append(f"warn_threshold must be within [0, 1] (got {config.warn_threshold}).")
    if config.request_timeout_sec <= 0:
        problems.append(f"request_timeout_sec must be positive (got {config.request_timeout_sec}).")
    if config.classifier_timeout_sec <= 0:
        problems.append(f"classifier_timeout_sec must be positive (got {config.classifier_timeout_sec}).")
    if config.classifier_max_tokens <= 0:
        problems.append(f"classifier_max_tokens must be positive (got {config.classifier_max_tokens}).")

    return problems


# -------------------------
# Env helpers
# -------------------------


def _env_str(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def _env_int(key: str, default: int) -> int:
    raw = _env_str(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key}={raw!r}; using {default}")
        return default


def _env_float(key: str, default: float) -> float:
    raw = _env_str(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key}={raw!r}; using {default}")
        return default


def _env_bool(key: str, default: bool) -> bool:
    raw = _env_str(key)
    if not raw:
        return default
    value = raw.lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    logger.warning(f"Ignoring non-boolean {key}={raw!r}; using {default}")
    return default


def load_search_config(prefix: str = ENV_PREFIX) -> SearchConfig:
    """Build a SearchConfig from ``STANCE_RAG_*`` environment variables.

    Values are taken as-is; call validate_search_config() on the result to
    surface out-of-bounds settings.
    """
    return SearchConfig(
        top_k=_env_int(f"{prefix}TOP_K", DEFAULT_TOP_K),
        snippet_size=_env_int(f"{prefix}SNIPPET_SIZE", DEFAULT_SNIPPET_SIZE),
        enable_score_filtering=_env_bool(f"{prefix}ENABLE_SCORE_FILTERING", DEFAULT_ENABLE_SCORE_FILTERING),
        min_similarity_score=_env_float(f"{prefix}MIN_SIMILARITY_SCORE", DEFAULT_MIN_SIMILARITY_SCORE),
        warn_threshold=_env_float(f"{prefix}WARN_THRESHOLD", DEFAULT_WARN_THRESHOLD),
        request_timeout_sec=_env_float(f"{prefix}REQUEST_TIMEOUT_SEC", DEFAULT_REQUEST_TIMEOUT_SEC),
        classifier_timeout_sec=_env_float(f"{prefix}CLASSIFIER_TIMEOUT_SEC", DEFAULT_CLASSIFIER_TIMEOUT_SEC),
        classifier_max_tokens=_env_int(f"{prefix}CLASSIFIER_MAX_TOKENS", DEFAULT_CLASSIFIER_MAX_TOKENS),
    )


def load_backend_config(env_prefix: str = "PINECONE_") -> BackendConfig:
    """Read evidence backend credentials (``PINECONE_API_KEY``, ``PINECONE_ASSISTANT_NAME``, ...)."""
    return BackendConfig(
        api_key=_env_str(f"{env_prefix}API_KEY"),
        assistant_name=_env_str(f"{env_prefix}ASSISTANT_NAME"),
        host=_env_str(f"{env_prefix}ASSISTANT_HOST", DEFAULT_BACKEND_HOST).rstrip("/"),
        api_version=_env_str(f"{env_prefix}API_VERSION", DEFAULT_BACKEND_API_VERSION),
    )
