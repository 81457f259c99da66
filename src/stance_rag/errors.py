# src/stance_rag/errors.py
"""Exception types surfaced by the decision engine.

Only retrieval failures are raised across component boundaries. Classification
problems degrade to the keyword rules, configuration problems are returned as
messages, and malformed sessions are repaired in place.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StanceRagError(Exception):
    """Base class for stance_rag errors."""


class RetrievalFailed(StanceRagError):
    """The evidence backend was unreachable, timed out, or returned a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, retryable: bool = True):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retryable = retryable

    def to_error_record(self, node: str) -> Dict[str, Any]:
        return {
            "node": node,
            "type": "retrieval_failed",
            "message": self.message,
            "retryable": self.retryable,
            "details": {"status_code": self.status_code} if self.status_code is not None else None,
        }
