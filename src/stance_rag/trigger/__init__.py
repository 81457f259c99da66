"""Per-turn decision on whether evidence retrieval should run."""

from stance_rag.trigger.classifier import TriggerClassifier, build_trigger_conditions
from stance_rag.trigger.parsing import ParsedVerdict, TriggerVerdict, parse_trigger_response
from stance_rag.trigger.rules import (
    KEYWORD_RULES,
    KeywordDecision,
    evaluate_keyword_rules,
    is_question_clear,
    is_substantial,
    needs_factual_support,
    should_trigger_with_keywords,
)

__all__ = [
    "KEYWORD_RULES",
    "KeywordDecision",
    "ParsedVerdict",
    "TriggerClassifier",
    "TriggerVerdict",
    "build_trigger_conditions",
    "evaluate_keyword_rules",
    "is_question_clear",
    "is_substantial",
    "needs_factual_support",
    "parse_trigger_response",
    "should_trigger_with_keywords",
]
