# src/stance_rag/session/session.py
"""Pure operations over SearchSession snapshots.

Nothing in here mutates its input; every function returns a new session.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Sequence

from stance_rag.session.state import (
    ActionTaken,
    ClarificationState,
    ConversationStats,
    EvidenceSnippet,
    SearchSession,
    Standpoint,
    Strategy,
)

logger = logging.getLogger(__name__)

USER_PREFIX = "User: "
ASSISTANT_PREFIX = "Assistant: "


def initialize_session(topic: str, standpoint: Standpoint, strategy: Strategy) -> SearchSession:
    clarification_state = ClarificationState() if strategy == "clarification" else None
    return SearchSession(
        topic=topic,
        standpoint=standpoint,
        strategy=strategy,
        clarification_state=clarification_state,
    )


def repair_session(session: SearchSession) -> SearchSession:
    """Restore the clarification_state <-> strategy invariant.

    A clarification session without state gets a fresh default state; a
    suggestion session carrying a stray state has it dropped.
    """
    if session.strategy == "clarification" and session.clarification_state is None:
        logger.warning("Clarification session missing clarification_state; reconstructing default state")
        return session.model_copy(update={"clarification_state": ClarificationState()})

    if session.strategy == "suggestion" and session.clarification_state is not None:
        logger.warning("Suggestion session carries a clarification_state; dropping it")
        return session.model_copy(update={"clarification_state": None})

    return session


def recent_dialogue(session: SearchSession, max_turns: int) -> List[str]:
    """Last ``max_turns`` user/assistant pairs, oldest first."""
    if max_turns <= 0:
        return []
    return list(session.dialogue_history[-2 * max_turns :])


def _fold_clarification(state: Optional[ClarificationState], action: ActionTaken) -> Optional[ClarificationState]:
    if state is None:
        return None
    if action.searched:
        return state.model_copy(update={"is_awaiting_clarification": False, "is_ready_for_search": True})
    if action.asked_clarification:
        # is_ready_for_search is left untouched: readiness is one-way
        return state.model_copy(update={"is_awaiting_clarification": True})
    return state


def _fold_stats(
    stats: ConversationStats,
    action: ActionTaken,
    user_message: str,
    timestamp: float,
) -> ConversationStats:
    update = {"conversation_turns": stats.conversation_turns + 1}
    if action.searched:
        update["search_trigger_count"] = stats.search_trigger_count + 1
        update["last_search_query"] = user_message
        update["last_search_timestamp"] = timestamp
    if action.asked_clarification:
        update["clarification_question_count"] = stats.clarification_question_count + 1
    if action.provided_suggestion:
        update["suggestion_count"] = stats.suggestion_count + 1
    return stats.model_copy(update=update)


def record_turn(
    session: SearchSession,
    user_message: str,
    assistant_text: str,
    action_taken: Optional[ActionTaken] = None,
    evidence: Optional[Sequence[EvidenceSnippet]] = None,
    *,
    timestamp: Optional[float] = None,
) -> SearchSession:
    """Produce the next session snapshot after a completed turn.

    ``evidence`` must only be passed when a search actually ran this turn;
    None keeps the previously retrieved evidence.
    """
    session = repair_session(session)
    action = action_taken or ActionTaken()
    ts = time.time() if timestamp is None else timestamp

    update = {
        "dialogue_history": session.dialogue_history
        + (f"{USER_PREFIX}{user_message}", f"{ASSISTANT_PREFIX}{assistant_text}"),
        "clarification_state": _fold_clarification(session.clarification_state, action),
        "stats": _fold_stats(session.stats, action, user_message, ts),
    }
    if evidence is not None:
        update["last_retrieved_evidence"] = tuple(evidence)

    return session.model_copy(update=update)
