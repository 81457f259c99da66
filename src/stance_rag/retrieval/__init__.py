"""Evidence retrieval: backend adapters, relevance and standpoint filters."""

from stance_rag.retrieval.adapters import EvidenceBackend, HttpEvidenceBackend, parse_context_payload, parse_snippet
from stance_rag.retrieval.filters import filter_by_score, filter_by_standpoint
from stance_rag.retrieval.retriever import EvidenceRetriever, enhance_query

__all__ = [
    "EvidenceBackend",
    "EvidenceRetriever",
    "HttpEvidenceBackend",
    "enhance_query",
    "filter_by_score",
    "filter_by_standpoint",
    "parse_context_payload",
    "parse_snippet",
]
