"""Prompts for the trigger classifier."""

from stance_rag.trigger.prompts.trigger import TRIGGER_PROMPT, TRIGGER_PROMPT_VERSION, TRIGGER_SYSTEM_PROMPT

__all__ = [
    "TRIGGER_PROMPT",
    "TRIGGER_PROMPT_VERSION",
    "TRIGGER_SYSTEM_PROMPT",
]
