# src/stance_rag/nodes/retrieve_evidence.py

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from stance_rag.errors import RetrievalFailed
from stance_rag.retrieval.retriever import EvidenceRetriever
from stance_rag.state import TurnState
from stance_rag.utils import observe, with_error_handling

logger = logging.getLogger(__name__)


def make_retrieve_evidence_node(
    retriever: EvidenceRetriever,
    *,
    top_k: Optional[int] = None,
    snippet_size: Optional[int] = None,
):
    # RetrievalFailed must escape: the graph retry policy and decide() act on it
    @observe
    @with_error_handling("retrieve_evidence", passthrough=(RetrievalFailed,))
    async def retrieve_evidence(state: TurnState) -> Dict[str, Any]:
        evidence = await retriever.retrieve(
            state.get("user_message", ""),
            state["session"],
            top_k=top_k,
            snippet_size=snippet_size,
        )
        return {"evidence": evidence}

    return retrieve_evidence
