"""Per-conversation search session state and its pure update operations."""

from stance_rag.session.session import initialize_session, recent_dialogue, record_turn, repair_session
from stance_rag.session.state import (
    ActionTaken,
    ClarificationState,
    ConversationStats,
    EvidenceSnippet,
    SearchSession,
    SourceRef,
    Standpoint,
    Strategy,
    TurnDecision,
)
from stance_rag.session.store import InMemorySessionStore, SessionStore

__all__ = [
    "ActionTaken",
    "ClarificationState",
    "ConversationStats",
    "EvidenceSnippet",
    "InMemorySessionStore",
    "SearchSession",
    "SessionStore",
    "SourceRef",
    "Standpoint",
    "Strategy",
    "TurnDecision",
    "initialize_session",
    "recent_dialogue",
    "record_turn",
    "repair_session",
]
