# src/stance_rag/trigger/classifier.py

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

from langchain_core.prompts import ChatPromptTemplate

from stance_rag.config import SearchConfig
from stance_rag.constants import DEFAULT_CLASSIFIER_MAX_TOKENS, DEFAULT_CLASSIFIER_TIMEOUT_SEC
from stance_rag.session.state import ClarificationState, Strategy
from stance_rag.trigger.parsing import parse_trigger_response
from stance_rag.trigger.prompts.trigger import (
    CLARIFICATION_AWAITING_RULES,
    CLARIFICATION_PENDING_RULES,
    CLARIFICATION_READY_RULES,
    NO_RECENT_DIALOGUE,
    SUGGESTION_NEEDS_SUPPORT_NOTE,
    SUGGESTION_RULES,
    TRIGGER_PROMPT,
    TRIGGER_SYSTEM_PROMPT,
    UNIVERSAL_CONDITIONS,
)
from stance_rag.trigger.rules import evaluate_keyword_rules
from stance_rag.utils import observe

logger = logging.getLogger(__name__)


def build_strategy_rules(
    strategy: Strategy,
    clarification_state: Optional[ClarificationState],
    needs_factual_support: bool,
) -> str:
    if strategy == "clarification":
        if clarification_state is None:
            return CLARIFICATION_PENDING_RULES
        if clarification_state.is_awaiting_clarification and not clarification_state.is_ready_for_search:
            return CLARIFICATION_AWAITING_RULES
        if clarification_state.is_ready_for_search:
            return CLARIFICATION_READY_RULES
        return CLARIFICATION_PENDING_RULES

    if needs_factual_support:
        return f"{SUGGESTION_RULES}\n{SUGGESTION_NEEDS_SUPPORT_NOTE}"
    return SUGGESTION_RULES


def build_trigger_conditions(
    strategy: Strategy,
    clarification_state: Optional[ClarificationState],
    needs_factual_support: bool,
) -> str:
    return f"{UNIVERSAL_CONDITIONS}\n\n{build_strategy_rules(strategy, clarification_state, needs_factual_support)}"


def _response_text(raw: Any) -> str:
    # Chat models return AIMessage; content may be a list of blocks
    content = getattr(raw, "content", raw)
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return content if isinstance(content, str) else str(content)


class TriggerClassifier:
    """Decides per turn whether evidence retrieval should run now.

    With a chat model the decision comes from a small classification call,
    parsed leniently; every failure on that path (call error, timeout,
    unparseable output) degrades to the keyword rules. Without a model the
    keyword rules decide directly. Callers only ever see a bool.
    """

    def __init__(
        self,
        llm=None,
        *,
        max_tokens: int = DEFAULT_CLASSIFIER_MAX_TOKENS,
        timeout_sec: float = DEFAULT_CLASSIFIER_TIMEOUT_SEC,
    ):
        self.llm = llm
        self.max_tokens = max_tokens
        self.timeout_sec = timeout_sec
        # Build prompt once
        self.prompt = ChatPromptTemplate.from_messages(
            [
                ("system", TRIGGER_SYSTEM_PROMPT),
                ("human", TRIGGER_PROMPT),
            ]
        )

    @classmethod
    def from_config(cls, config: SearchConfig, llm=None) -> "TriggerClassifier":
        return cls(llm, max_tokens=config.classifier_max_tokens, timeout_sec=config.classifier_timeout_sec)

    @observe
    async def should_trigger(
        self,
        user_message: str,
        topic: str,
        strategy: Strategy,
        clarification_state: Optional[ClarificationState] = None,
        needs_factual_support: bool = False,
        llm=None,
        *,
        history: Sequence[str] = (),
    ) -> bool:
        model = llm if llm is not None else self.llm
        if model is None:
            return self._keywords(user_message, strategy, clarification_state, needs_factual_support)

        try:
            prompt_val = self.prompt.invoke(
                {
                    "topic": topic,
                    "user_message": user_message,
                    "recent_dialogue": "\n".join(history) if history else NO_RECENT_DIALOGUE,
                    "trigger_conditions": build_trigger_conditions(
                        strategy, clarification_state, needs_factual_support
                    ),
                }
            )
            bounded = model.bind(max_tokens=self.max_tokens)
            raw = await asyncio.wait_for(bounded.ainvoke(prompt_val), timeout=self.timeout_sec)
        except asyncio.TimeoutError:
            return self._degrade(
                f"classification call exceeded {self.timeout_sec}s",
                user_message,
                strategy,
                clarification_state,
                needs_factual_support,
            )
        except Exception as e:
            # transport/provider errors
            return self._degrade(
                f"classification call failed ({type(e).__name__}: {e})",
                user_message,
                strategy,
                clarification_state,
                needs_factual_support,
            )

        parsed = parse_trigger_response(_response_text(raw))
        if parsed is None:
            return self._degrade(
                "unparseable classification output",
                user_message,
                strategy,
                clarification_state,
                needs_factual_support,
            )

        logger.debug(f"Trigger decision via model ({parsed.stage}): {parsed.should_trigger} {parsed.reason!r}")
        return parsed.should_trigger

    def _keywords(
        self,
        user_message: str,
        strategy: Strategy,
        clarification_state: Optional[ClarificationState],
        needs_factual_support: bool,
    ) -> bool:
        decision = evaluate_keyword_rules(user_message, strategy, clarification_state, needs_factual_support)
        logger.debug(f"Trigger decision via keyword rule '{decision.rule}': {decision.should_trigger}")
        return decision.should_trigger

    def _degrade(
        self,
        reason: str,
        user_message: str,
        strategy: Strategy,
        clarification_state: Optional[ClarificationState],
        needs_factual_support: bool,
    ) -> bool:
        logger.warning(f"ClassificationDegraded: {reason}; falling back to keyword rules")
        return self._keywords(user_message, strategy, clarification_state, needs_factual_support)
