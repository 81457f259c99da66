# src/stance_rag/retrieval/retriever.py

from __future__ import annotations

import logging
from typing import List, Optional

from stance_rag.config import SearchConfig
from stance_rag.retrieval.adapters import EvidenceBackend
from stance_rag.retrieval.filters import filter_by_score, filter_by_standpoint
from stance_rag.session.state import EvidenceSnippet, SearchSession
from stance_rag.utils import observe

logger = logging.getLogger(__name__)


def enhance_query(query: str, topic: str) -> str:
    return f"{topic}: {query}"


class EvidenceRetriever:
    """Fetches evidence for a turn and narrows it to the session's standpoint.

    Pipeline: topic-prefixed query -> backend search -> score filter (when
    enabled) -> standpoint filter. Backend order is preserved throughout.
    Backend failures surface as RetrievalFailed; nothing here catches them.
    """

    def __init__(self, backend: EvidenceBackend, config: Optional[SearchConfig] = None):
        self.backend = backend
        self.config = config or SearchConfig()

    @observe
    async def retrieve(
        self,
        query: str,
        session: SearchSession,
        top_k: Optional[int] = None,
        snippet_size: Optional[int] = None,
    ) -> List[EvidenceSnippet]:
        cfg = self.config
        enhanced = enhance_query(query, session.topic)

        snippets = await self.backend.search(
            query=enhanced,
            top_k=cfg.top_k if top_k is None else top_k,
            snippet_size=cfg.snippet_size if snippet_size is None else snippet_size,
        )
        logger.info(f"Backend returned {len(snippets)} snippet(s) for query {enhanced!r}")

        if cfg.enable_score_filtering:
            snippets = filter_by_score(snippets, cfg.min_similarity_score)
            self._warn_on_low_relevance(snippets)

        snippets = filter_by_standpoint(snippets, session.standpoint)
        logger.info(f"Retrieved {len(snippets)} snippet(s) for standpoint '{session.standpoint}'")
        return snippets

    def _warn_on_low_relevance(self, snippets: List[EvidenceSnippet]) -> None:
        if not snippets:
            logger.warning(
                f"No snippets at or above min_similarity_score={self.config.min_similarity_score}; "
                "consider lowering the threshold"
            )
            return
        best = max(s.score for s in snippets)
        if best < self.config.warn_threshold:
            logger.warning(f"Best snippet score {best:.4f} is below warn_threshold={self.config.warn_threshold}")
