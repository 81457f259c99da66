# src/stance_rag/graph.py
from __future__ import annotations

from typing import Optional

from langgraph.graph import END, START, StateGraph
from langgraph.types import RetryPolicy

from stance_rag.constants import DEFAULT_HISTORY_TURNS
from stance_rag.errors import RetrievalFailed
from stance_rag.nodes.compose_prompt import compose_prompt
from stance_rag.nodes.decide_action import make_decide_action_node
from stance_rag.nodes.retrieve_evidence import make_retrieve_evidence_node
from stance_rag.retrieval.retriever import EvidenceRetriever
from stance_rag.state import TurnState
from stance_rag.trigger.classifier import TriggerClassifier


def _retryable_retrieval(exc: Exception) -> bool:
    return isinstance(exc, RetrievalFailed) and exc.retryable


def make_turn_graph(
    classifier: TriggerClassifier,
    retriever: EvidenceRetriever,
    *,
    llm=None,
    max_retries: int = 1,
    history_turns: int = DEFAULT_HISTORY_TURNS,
    top_k: Optional[int] = None,
    snippet_size: Optional[int] = None,
):
    """decide_action -> (retrieve_evidence) -> compose_prompt."""
    retrieval_retry = RetryPolicy(max_attempts=max(1, int(max_retries)), retry_on=_retryable_retrieval)

    g = StateGraph(TurnState)

    g.add_node("decide_action", make_decide_action_node(classifier, llm=llm, history_turns=history_turns))
    g.add_node(
        "retrieve_evidence",
        make_retrieve_evidence_node(retriever, top_k=top_k, snippet_size=snippet_size),
        retry_policy=retrieval_retry,
    )
    g.add_node("compose_prompt", compose_prompt)

    g.add_edge(START, "decide_action")

    def route_after_decide(state: TurnState):
        action = state.get("action_taken")
        return "retrieve_evidence" if action is not None and action.searched else "compose_prompt"

    g.add_conditional_edges("decide_action", route_after_decide, ["retrieve_evidence", "compose_prompt"])

    g.add_edge("retrieve_evidence", "compose_prompt")
    g.add_edge("compose_prompt", END)

    return g.compile()
