from stance_rag.prompting.prompts.system_prompt import (
    EVIDENCE_DELIMITER,
    FALLBACK_SYSTEM_PROMPT,
    NO_EVIDENCE_PLACEHOLDER,
    STANDPOINT_CONCEALMENT_RULE,
    STANDPOINT_INSTRUCTIONS,
    STRATEGY_INSTRUCTIONS,
    SYSTEM_PROMPT_VERSION,
)

__all__ = [
    "EVIDENCE_DELIMITER",
    "FALLBACK_SYSTEM_PROMPT",
    "NO_EVIDENCE_PLACEHOLDER",
    "STANDPOINT_CONCEALMENT_RULE",
    "STANDPOINT_INSTRUCTIONS",
    "STRATEGY_INSTRUCTIONS",
    "SYSTEM_PROMPT_VERSION",
]
