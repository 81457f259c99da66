# src/stance_rag/nodes/decide_action.py

from __future__ import annotations

import logging
from typing import Any, Dict

from stance_rag.constants import DEFAULT_HISTORY_TURNS
from stance_rag.session.session import recent_dialogue
from stance_rag.session.state import ActionTaken, SearchSession
from stance_rag.state import TurnState
from stance_rag.trigger.classifier import TriggerClassifier
from stance_rag.trigger.rules import is_question_clear, is_substantial, needs_factual_support
from stance_rag.utils import observe, with_error_handling

logger = logging.getLogger(__name__)


async def _decide_suggestion(
    session: SearchSession,
    user_message: str,
    classifier: TriggerClassifier,
    llm,
    history_turns: int,
) -> ActionTaken:
    has_context = session.has_retrieved_context

    # Bootstrap: the first substantial message always searches, no classifier call
    if not has_context and is_substantial(user_message):
        return ActionTaken(searched=True, provided_suggestion=True)

    hint = (
        needs_factual_support(user_message, has_context)
        or is_question_clear(user_message)
        or is_substantial(user_message)
    )
    searched = await classifier.should_trigger(
        user_message,
        session.topic,
        "suggestion",
        None,
        hint,
        llm,
        history=recent_dialogue(session, history_turns),
    )
    return ActionTaken(searched=searched, provided_suggestion=True)


async def _decide_clarification(
    session: SearchSession,
    user_message: str,
    classifier: TriggerClassifier,
    llm,
    history_turns: int,
) -> ActionTaken:
    state = session.clarification_state

    # NEED_CLARIFICATION
    if state is None:
        return ActionTaken(asked_clarification=True)

    history = recent_dialogue(session, history_turns)

    # AWAITING
    if state.is_awaiting_clarification and not state.is_ready_for_search:
        ready = await classifier.should_trigger(
            user_message, session.topic, "clarification", state, False, llm, history=history
        )
        if ready:
            return ActionTaken(searched=True)
        return ActionTaken(asked_clarification=True)

    # QUESTION-CLARITY CHECK
    if not is_question_clear(user_message):
        return ActionTaken(asked_clarification=True)

    searched = await classifier.should_trigger(
        user_message, session.topic, "clarification", state, False, llm, history=history
    )
    return ActionTaken(searched=searched)


async def decide_action(
    session: SearchSession,
    user_message: str,
    classifier: TriggerClassifier,
    llm=None,
    history_turns: int = DEFAULT_HISTORY_TURNS,
) -> ActionTaken:
    """Map (session, message) to this turn's action, per strategy."""
    if session.strategy == "clarification":
        return await _decide_clarification(session, user_message, classifier, llm, history_turns)
    return await _decide_suggestion(session, user_message, classifier, llm, history_turns)


def make_decide_action_node(classifier: TriggerClassifier, *, llm=None, history_turns: int = DEFAULT_HISTORY_TURNS):
    @observe
    @with_error_handling("decide_action")
    async def decide_action_node(state: TurnState) -> Dict[str, Any]:
        session = state["session"]
        action = await decide_action(session, state.get("user_message", ""), classifier, llm, history_turns)
        logger.debug(f"Action for {session.strategy} turn: {action.model_dump()}")
        return {"action_taken": action}

    return decide_action_node
