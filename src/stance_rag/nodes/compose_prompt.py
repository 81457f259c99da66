# src/stance_rag/nodes/compose_prompt.py

from __future__ import annotations

from typing import Any, Dict

from stance_rag.prompting.composer import compose
from stance_rag.state import TurnState
from stance_rag.utils import with_error_handling


@with_error_handling("compose_prompt")
async def compose_prompt(state: TurnState) -> Dict[str, Any]:
    session = state["session"]
    # Only this turn's evidence; a turn without search composes with none
    evidence = list(state.get("evidence") or [])
    return {"system_prompt": compose(session.standpoint, session.strategy, session.topic, evidence)}
