# src/stance_rag/session/state.py
from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# -------------------------
# Small reusable primitives
# -------------------------

Standpoint = Literal["supporting", "opposing"]
Strategy = Literal["suggestion", "clarification"]

STANDPOINTS: Tuple[Standpoint, ...] = ("supporting", "opposing")
STRATEGIES: Tuple[Strategy, ...] = ("suggestion", "clarification")


# -------------------------
# Evidence
# -------------------------


class SourceRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    document_id: Optional[str] = None
    document_name: Optional[str] = None
    page_numbers: Tuple[int, ...] = ()


class EvidenceSnippet(BaseModel):
    """A scored excerpt returned by the evidence-search backend.

    ``standpoint_tag`` of None means the snippet is untagged (neutral).
    """

    model_config = ConfigDict(frozen=True)

    content: str
    score: float = Field(..., ge=0.0, le=1.0)
    source_ref: Optional[SourceRef] = None
    standpoint_tag: Optional[Standpoint] = None


# -------------------------
# Session
# -------------------------


class ConversationStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_trigger_count: int = 0
    clarification_question_count: int = 0
    suggestion_count: int = 0
    conversation_turns: int = 0
    last_search_query: Optional[str] = None
    last_search_timestamp: Optional[float] = None  # epoch seconds


class ClarificationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_awaiting_clarification: bool = False
    is_ready_for_search: bool = False  # one-way: never reset once True
    pending_clarification_questions: Tuple[str, ...] = ()


class SearchSession(BaseModel):
    """Search configuration and history for one conversation.

    Frozen: every turn produces a new snapshot via ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    topic: str = Field(..., min_length=1)
    standpoint: Standpoint
    strategy: Strategy

    dialogue_history: Tuple[str, ...] = ()
    last_retrieved_evidence: Optional[Tuple[EvidenceSnippet, ...]] = None

    stats: ConversationStats = Field(default_factory=ConversationStats)
    clarification_state: Optional[ClarificationState] = None

    @property
    def has_retrieved_context(self) -> bool:
        return bool(self.last_retrieved_evidence)


# -------------------------
# Turn outputs
# -------------------------


class ActionTaken(BaseModel):
    model_config = ConfigDict(frozen=True)

    searched: bool = False
    asked_clarification: bool = False
    provided_suggestion: bool = False


class TurnDecision(BaseModel):
    """What ConversationPolicy.decide() hands back to the chat layer."""

    model_config = ConfigDict(frozen=True)

    system_prompt: str
    evidence: List[EvidenceSnippet] = Field(default_factory=list)
    action_taken: ActionTaken = Field(default_factory=ActionTaken)
    retrieval_failed: bool = False
