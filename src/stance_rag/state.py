# src/stance_rag/state.py
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from typing_extensions import TypedDict

from stance_rag.session.state import ActionTaken, EvidenceSnippet, SearchSession


# Reducer to append errors across nodes
def add_errors(existing: Optional[List[Dict[str, Any]]], new: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    if not existing:
        existing = []
    if not new:
        return existing
    return existing + new


class TurnState(TypedDict, total=False):
    """State for one decide() pass through the turn graph.

    The session is read-only input; nothing in the graph writes it back.
    """

    # Inputs
    session: SearchSession
    user_message: str

    # decide_action
    action_taken: ActionTaken

    # retrieve_evidence
    evidence: List[EvidenceSnippet]

    # compose_prompt
    system_prompt: str

    # Shared error channel
    errors: Annotated[List[Dict[str, Any]], add_errors]
