# src/stance_rag/policy.py
"""Per-turn conversation policy: decide what to do, then record what happened.

Usage:
    policy = ConversationPolicy(retriever, classifier)
    decision = await policy.decide(session, user_message)
    reply = await chat_model.ainvoke([SystemMessage(decision.system_prompt), ...])
    session = policy.record_decision(session, user_message, reply.content, decision)

Callers serialize turns of one session: await record_decision() before the
next decide(). decide() never touches the session, so cancelling it at any
point leaves the caller's snapshot exactly as it was.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from stance_rag.config import SearchConfig
from stance_rag.constants import DEFAULT_HISTORY_TURNS
from stance_rag.errors import RetrievalFailed
from stance_rag.graph import make_turn_graph
from stance_rag.prompting.composer import baseline_prompt
from stance_rag.retrieval.retriever import EvidenceRetriever
from stance_rag.session import session as session_ops
from stance_rag.session.state import ActionTaken, EvidenceSnippet, SearchSession, TurnDecision
from stance_rag.trigger.classifier import TriggerClassifier
from stance_rag.utils import observe

logger = logging.getLogger(__name__)


class ConversationPolicy:
    def __init__(
        self,
        retriever: EvidenceRetriever,
        classifier: TriggerClassifier,
        *,
        config: Optional[SearchConfig] = None,
        llm=None,
        max_retries: int = 1,
        history_turns: int = DEFAULT_HISTORY_TURNS,
    ):
        self.retriever = retriever
        self.classifier = classifier
        self.config = config or retriever.config
        self.graph = make_turn_graph(
            classifier,
            retriever,
            llm=llm,
            max_retries=max_retries,
            history_turns=history_turns,
            top_k=self.config.top_k,
            snippet_size=self.config.snippet_size,
        )

    @observe
    async def decide(self, session: SearchSession, user_message: str) -> TurnDecision:
        try:
            out = await self.graph.ainvoke({"session": session, "user_message": user_message})
        except RetrievalFailed as e:
            logger.warning(f"Retrieval failed; answering with baseline prompt: {e.to_error_record('retrieve_evidence')}")
            return TurnDecision(system_prompt=baseline_prompt(), retrieval_failed=True)

        for err in out.get("errors") or []:
            logger.warning(f"Turn graph error in {err.get('node')}: {err.get('type')}: {err.get('message')}")

        action: ActionTaken = out.get("action_taken") or ActionTaken()
        evidence = list(out.get("evidence") or []) if action.searched else []
        system_prompt = out.get("system_prompt") or baseline_prompt()

        logger.info(
            f"Turn decided: searched={action.searched} asked_clarification={action.asked_clarification} "
            f"provided_suggestion={action.provided_suggestion} evidence={len(evidence)}"
        )
        return TurnDecision(system_prompt=system_prompt, evidence=evidence, action_taken=action)

    def record_turn(
        self,
        session: SearchSession,
        user_message: str,
        assistant_text: str,
        action_taken: Optional[ActionTaken] = None,
        evidence: Optional[Sequence[EvidenceSnippet]] = None,
        *,
        timestamp: Optional[float] = None,
    ) -> SearchSession:
        return session_ops.record_turn(
            session, user_message, assistant_text, action_taken, evidence, timestamp=timestamp
        )

    def record_decision(
        self,
        session: SearchSession,
        user_message: str,
        assistant_text: str,
        decision: TurnDecision,
        *,
        timestamp: Optional[float] = None,
    ) -> SearchSession:
        """record_turn() for a decide() result; evidence is stored only when a search ran."""
        evidence = decision.evidence if decision.action_taken.searched else None
        return self.record_turn(
            session, user_message, assistant_text, decision.action_taken, evidence, timestamp=timestamp
        )
