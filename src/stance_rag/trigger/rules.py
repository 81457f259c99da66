# src/stance_rag/trigger/rules.py
"""Deterministic keyword rules for search triggering.

The evaluator walks KEYWORD_RULES in order and the first rule that applies
decides. Keep the table order in sync with the precedence documented on each
rule; tests pin it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Sequence, Tuple

from stance_rag.constants import CLEAR_QUESTION_MIN_CHARS, SUBSTANTIAL_MESSAGE_MIN_CHARS
from stance_rag.session.state import ClarificationState, Strategy


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def _matches_any(patterns: Sequence[Pattern[str]], text: str) -> bool:
    return any(p.search(text) for p in patterns)


# -------------------------
# Pattern families
# -------------------------

CLEAR_OPINION_PATTERNS = _compile(
    r"\b(?:i|we)\b.*\b(?:just|simply|only)\b.*\b(?:think|feel|believe|want|prefer)",
    r"\b(?:just|simply|only)\b.*\b(?:think|feel|believe|want|prefer)",
    r"\b(?:i|we)\b.*\b(?:think|feel|believe)\b.*\b(?:that|it|this)\b.*\b(?:is|are|should|shouldn't)\b",
    r"\b(?:i|we)\b.*\b(?:don't|do not)\b.*\b(?:need|want)\b.*\b(?:evidence|proof|data|research)",
)

EVIDENCE_REQUEST_PATTERNS = _compile(
    r"\b(?:show|provide|give|need|want|can|could|would|have|has).*"
    r"(?:evidence|data|research|study|studies|source|proof|support|statistics|survey|information|facts)",
    r"(?:evidence|data|research|study|studies|source|proof|support|statistics|survey|information|facts).*"
    r"\b(?:show|provide|give|need|want|have|has)",
    r"\b(?:what|which)\b.*(?:evidence|data|research|study|studies|source|proof|support|information|facts)",
    r"\b(?:based on|according to|according|cite|citation|reference)",
    r"\b(?:can you|could you|please)\b.*\b(?:show|provide|give).*"
    r"(?:evidence|data|research|study|source|proof|support|statistics|survey)",
)

UNCERTAINTY_PATTERNS = _compile(
    r"\b(?:i|we|i'm|we're)\b.*\b(?:don't|do not|not)\b.*\b(?:know|understand|sure|certain|clear)",
    r"\b(?:don't|do not)\b.*\b(?:know|understand|sure|certain|clear)",
    r"\b(?:what|which|how|why)\b.*(?:\b(?:is|are|do|does|did)|'s\b|'re\b)",
    r"\b(?:uncertain|unsure|not sure|don't know|unclear|confused)\b",
    r"\b(?:i'm not|i am not|we're not|we are not)\b.*\b(?:sure|certain|clear)",
    r"\b(?:what|which|how|why)\b.*\b(?:about|regarding|concerning)\b",
    r"\b(?:tell me|explain|help me understand)\b.*\b(?:what|which|how|why)\b",
)

SUBSTANTIVE_QUESTION_PATTERNS = _compile(
    r"\b(?:what|how|why|which|when|where|who)\b.*\b(?:about|regarding|concerning|related to)\b",
    r"\b(?:can you|could you|please)\b.*\b(?:explain|tell me|show me|help me understand)\b",
    r"\b(?:i want|i need|i'd like)\b.*\b(?:to know|to understand|to learn)\b",
)

SKEPTICISM_PATTERNS = _compile(
    # questioning the claim
    r"\b(?:really|actually|is that|are you sure|how do you know|what makes you think)\b",
    r"\b(?:i doubt|i'm skeptical|i'm not convinced|i don't believe)\b",
    # asking for proof
    r"\b(?:prove|show me|demonstrate|back up|support)\b.*\b(?:that|your|this|it)\b",
    r"\b(?:where|what|which)\b.*(?:proof|evidence|data|source|study|research)",
    # wanting more information
    r"\b(?:need|want|require)\b.*\b(?:more|additional|further)\b.*(?:information|data|evidence|proof)",
    r"\b(?:i need|i want|i require)\b.*(?:to see|to know|evidence|data|proof)",
    # challenging the statement
    r"\b(?:but|however|although)\b.*\b(?:is|are|do|does|can|could)\b",
    r"\b(?:what about|how about|what if)\b.*\b(?:the|this|that|it)\b",
    # sources
    r"(?:source|reference|citation|where did you get|where is this from)",
)

EVALUATION_TERM_PATTERNS = _compile(
    r"\b(?:according to|based on|studies show|research indicates|data suggests)\b",
    r"\b(?:statistics|statistical|percentage|percent|study|studies|research)\b",
)

ASKING_PATTERNS = _compile(
    r"\b(?:what|which|how many|how much|what percentage|what data)\b",
    r"\b(?:show|tell|give|provide)\b.*\b(?:me|us)\b",
)

CLEAR_QUESTION_PATTERNS = _compile(
    r"\b(?:what|how|why|which|when|where|who|whom|whose)\b",
)


# -------------------------
# Predicates
# -------------------------


def is_expressing_clear_opinion(user_message: str) -> bool:
    return _matches_any(CLEAR_OPINION_PATTERNS, user_message)


def is_asking_for_evidence(user_message: str) -> bool:
    return _matches_any(EVIDENCE_REQUEST_PATTERNS, user_message)


def is_expressing_uncertainty(user_message: str) -> bool:
    return _matches_any(UNCERTAINTY_PATTERNS, user_message)


def is_substantial(user_message: str) -> bool:
    return len(user_message.strip()) >= SUBSTANTIAL_MESSAGE_MIN_CHARS


def is_question_clear(user_message: str) -> bool:
    """Cheap clarity check: long enough and contains an interrogative word."""
    if len(user_message.strip()) < CLEAR_QUESTION_MIN_CHARS:
        return False
    return _matches_any(CLEAR_QUESTION_PATTERNS, user_message)


def needs_factual_support(user_message: str, has_retrieved_context: bool) -> bool:
    """Does the message imply the user needs evidence to be convinced?

    True when:
    - nothing has been retrieved yet and the message is a substantive question
    - the message is skeptical or asks for proof/sources
    - the message mentions statistics/research terms while also asking about them
    """
    if not has_retrieved_context and _matches_any(SUBSTANTIVE_QUESTION_PATTERNS, user_message):
        return True

    if _matches_any(SKEPTICISM_PATTERNS, user_message):
        return True

    # Mentioning research casually is not enough; the user must be asking for it
    if _matches_any(EVALUATION_TERM_PATTERNS, user_message):
        return _matches_any(ASKING_PATTERNS, user_message)

    return False


# -------------------------
# Rule table
# -------------------------


@dataclass(frozen=True)
class TriggerContext:
    user_message: str
    strategy: Strategy
    clarification_state: Optional[ClarificationState] = None
    needs_factual_support: bool = False


@dataclass(frozen=True)
class TriggerRule:
    name: str
    applies: Callable[[TriggerContext], bool]
    outcome: Callable[[TriggerContext], bool]


@dataclass(frozen=True)
class KeywordDecision:
    should_trigger: bool
    rule: str


def _clarification_outcome(ctx: TriggerContext) -> bool:
    state = ctx.clarification_state
    if state is None:
        # Clarification questions come first
        return False
    if state.is_awaiting_clarification and not state.is_ready_for_search:
        return False
    return state.is_ready_for_search


def _suggestion_outcome(ctx: TriggerContext) -> bool:
    if ctx.needs_factual_support:
        return True
    # Suggestion strategy searches for any substantial message
    return is_substantial(ctx.user_message)


KEYWORD_RULES: Tuple[TriggerRule, ...] = (
    # 1. A stated personal opinion does not need evidence, whatever else matches
    TriggerRule("clear_opinion", lambda c: is_expressing_clear_opinion(c.user_message), lambda c: False),
    # 2. Explicit request for evidence/proof/sources
    TriggerRule("evidence_request", lambda c: is_asking_for_evidence(c.user_message), lambda c: True),
    # 3. User is unsure
    TriggerRule("uncertainty", lambda c: is_expressing_uncertainty(c.user_message), lambda c: True),
    # 4. Clarification strategy gates on readiness
    TriggerRule("clarification_strategy", lambda c: c.strategy == "clarification", _clarification_outcome),
    # 5. Suggestion strategy is aggressive about searching
    TriggerRule("suggestion_strategy", lambda c: c.strategy == "suggestion", _suggestion_outcome),
    # 6. Conservative default
    TriggerRule("default", lambda c: True, lambda c: False),
)


def evaluate_keyword_rules(
    user_message: str,
    strategy: Strategy,
    clarification_state: Optional[ClarificationState] = None,
    needs_factual_support: bool = False,
    rules: Sequence[TriggerRule] = KEYWORD_RULES,
) -> KeywordDecision:
    ctx = TriggerContext(
        user_message=user_message,
        strategy=strategy,
        clarification_state=clarification_state,
        needs_factual_support=needs_factual_support,
    )
    for rule in rules:
        if rule.applies(ctx):
            return KeywordDecision(should_trigger=bool(rule.outcome(ctx)), rule=rule.name)
    return KeywordDecision(should_trigger=False, rule="default")


def should_trigger_with_keywords(
    user_message: str,
    strategy: Strategy,
    clarification_state: Optional[ClarificationState] = None,
    needs_factual_support: bool = False,
) -> bool:
    return evaluate_keyword_rules(user_message, strategy, clarification_state, needs_factual_support).should_trigger
