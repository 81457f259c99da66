# src/stance_rag/utils.py
"""Utilities shared by graph nodes: observability and error handling."""

import functools
import logging
import os
from typing import Any, Callable, Dict

# Observability setup: Langfuse tracing unless explicitly disabled
OBSERVE_ENABLED = os.getenv("LANGFUSE_ENABLED", "1") == "1"

if OBSERVE_ENABLED:
    from langfuse import observe
else:

    def observe(fn=None, **kwargs):
        def _wrap(f):
            return f

        return _wrap(fn) if fn else _wrap


def with_error_handling(node_name: str, *, passthrough: tuple = ()) -> Callable:
    """Decorator to add consistent error handling to async graph nodes.

    Wraps node coroutines in try/except and returns structured error dicts.
    Exception types listed in ``passthrough`` are re-raised so that the graph
    retry policy and the caller can act on them.

    Args:
        node_name: Name of the node for error reporting
        passthrough: Exception types that must propagate out of the node

    Example:
        @with_error_handling("compose_prompt")
        async def compose_prompt(state: TurnState) -> Dict[str, Any]:
            ...
            return {"system_prompt": prompt}
    """

    def decorator(func: Callable) -> Callable:
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        async def wrapper(state: Dict[str, Any]) -> Dict[str, Any]:
            try:
                logger.debug(f"Starting {node_name}")
                result = await func(state)
                logger.debug(f"Completed {node_name}: {len(result)} fields returned")
                return result
            except passthrough:
                raise
            except Exception as e:
                logger.exception(f"Error in {node_name}: {e}")
                return {
                    "errors": [
                        {
                            "node": node_name,
                            "type": "runtime_error",
                            "message": str(e),
                            "retryable": True,
                            "details": {"exception_type": type(e).__name__},
                        }
                    ]
                }

        return wrapper

    return decorator
