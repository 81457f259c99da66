"""Stance-conditioned system prompt assembly."""

from stance_rag.prompting.composer import baseline_prompt, compose, format_evidence

__all__ = ["baseline_prompt", "compose", "format_evidence"]
