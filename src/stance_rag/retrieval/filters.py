# src/stance_rag/retrieval/filters.py

from __future__ import annotations

import logging
from typing import List, Sequence

from stance_rag.session.state import EvidenceSnippet, Standpoint

logger = logging.getLogger(__name__)


def filter_by_score(snippets: Sequence[EvidenceSnippet], min_score: float) -> List[EvidenceSnippet]:
    """Keep snippets with ``score >= min_score``, preserving order."""
    kept = [s for s in snippets if s.score >= min_score]
    dropped = len(snippets) - len(kept)
    if dropped:
        logger.info(f"Score filter dropped {dropped} snippet(s) below {min_score}; {len(kept)} remaining")
    return kept


def filter_by_standpoint(snippets: Sequence[EvidenceSnippet], standpoint: Standpoint) -> List[EvidenceSnippet]:
    """Keep snippets tagged with ``standpoint`` and untagged ones, preserving order."""
    kept = [s for s in snippets if s.standpoint_tag is None or s.standpoint_tag == standpoint]
    dropped = len(snippets) - len(kept)
    if dropped:
        logger.info(f"Standpoint filter dropped {dropped} snippet(s) tagged against '{standpoint}'")
    return kept
