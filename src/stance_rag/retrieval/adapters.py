# src/stance_rag/retrieval/adapters.py

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Protocol, Tuple

import httpx
from pydantic import ValidationError

from stance_rag.config import BackendConfig
from stance_rag.constants import DEFAULT_REQUEST_TIMEOUT_SEC
from stance_rag.errors import RetrievalFailed
from stance_rag.session.state import STANDPOINTS, EvidenceSnippet, SourceRef, Standpoint

logger = logging.getLogger(__name__)

# Uploaded files encode their standpoint as a filename prefix: "[supporting]report.pdf"
_FILENAME_STANDPOINT_RE = re.compile(r"^\[(supporting|opposing)\]")


class EvidenceBackend(Protocol):
    """Adapter for evidence-search backends.

    Example implementation over a local vector store:

        class LocalStoreBackend:
            def __init__(self, store):
                self.store = store

            async def search(self, *, query, top_k, snippet_size):
                hits = await self.store.asimilarity_search_with_score(query, k=top_k)
                return [
                    EvidenceSnippet(
                        content=doc.page_content[: snippet_size * 4],
                        score=score,
                        source_ref=SourceRef(document_name=doc.metadata.get("source")),
                        standpoint_tag=doc.metadata.get("stance"),
                    )
                    for doc, score in hits
                ]
    """

    async def search(self, *, query: str, top_k: int, snippet_size: int) -> List[EvidenceSnippet]:
        """Return scored snippets in backend order. Raise RetrievalFailed on any failure."""
        raise NotImplementedError


def standpoint_from_reference(reference: Dict[str, Any]) -> Optional[Standpoint]:
    """Explicit metadata wins; otherwise fall back to the filename prefix."""
    file_info = reference.get("file") or {}

    metadata = file_info.get("metadata") or {}
    stance = metadata.get("stance") if isinstance(metadata, dict) else None
    if stance in STANDPOINTS:
        return stance

    name = file_info.get("name")
    if isinstance(name, str):
        m = _FILENAME_STANDPOINT_RE.match(name)
        if m:
            return m.group(1)  # type: ignore[return-value]
    return None


def _page_numbers(raw_pages: Any) -> Tuple[int, ...]:
    if not isinstance(raw_pages, list):
        return ()
    pages = []
    for p in raw_pages:
        try:
            pages.append(int(p))
        except (TypeError, ValueError):
            logger.warning(f"Dropping non-integer page number {p!r}")
    return tuple(pages)


def parse_snippet(raw: Dict[str, Any]) -> EvidenceSnippet:
    reference = raw.get("reference") or {}
    file_info = reference.get("file") or {}

    source_ref = None
    if reference:
        source_ref = SourceRef(
            document_id=file_info.get("id"),
            document_name=file_info.get("name"),
            page_numbers=_page_numbers(reference.get("pages")),
        )

    return EvidenceSnippet(
        content=str(raw.get("content", "")),
        score=float(raw.get("score", 0.0)),
        source_ref=source_ref,
        standpoint_tag=standpoint_from_reference(reference),
    )


def parse_context_payload(payload: Any) -> List[EvidenceSnippet]:
    if not isinstance(payload, dict):
        raise RetrievalFailed("Evidence backend returned a non-object payload", retryable=False)

    raw_snippets = payload.get("snippets") or []
    if not isinstance(raw_snippets, list):
        raise RetrievalFailed("Evidence backend payload has a non-list 'snippets' field", retryable=False)

    snippets: List[EvidenceSnippet] = []
    for i, raw in enumerate(raw_snippets):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping snippet {i}: not an object")
            continue
        try:
            snippets.append(parse_snippet(raw))
        except (ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed snippet {i}: {e}")
    return snippets


class HttpEvidenceBackend:
    """Assistant context endpoint over HTTPS.

    POSTs ``{query, top_k, snippet_size}`` to
    ``{host}/assistant/chat/{assistant_name}/context``. Every failure mode
    (non-2xx, transport error, timeout, undecodable body) becomes RetrievalFailed.
    Pass ``client`` to reuse a connection pool; otherwise one client per call.
    """

    def __init__(
        self,
        backend_config: BackendConfig,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SEC,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = backend_config
        self.timeout = timeout
        self.client = client

    @property
    def url(self) -> str:
        return f"{self.config.host.rstrip('/')}/assistant/chat/{self.config.assistant_name}/context"

    def _headers(self) -> Dict[str, str]:
        return {
            "Api-Key": self.config.api_key,
            "Content-Type": "application/json",
            "X-Pinecone-API-Version": self.config.api_version,
        }

    async def search(self, *, query: str, top_k: int, snippet_size: int) -> List[EvidenceSnippet]:
        if not self.config.is_configured:
            raise RetrievalFailed("Evidence backend is not configured (missing API key or assistant name)", retryable=False)

        body = {"query": query, "top_k": top_k, "snippet_size": snippet_size}

        try:
            if self.client is not None:
                resp = await self.client.post(self.url, json=body, headers=self._headers(), timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.post(self.url, json=body, headers=self._headers())
        except httpx.TimeoutException as e:
            raise RetrievalFailed(f"Evidence backend timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise RetrievalFailed(f"Evidence backend transport error: {type(e).__name__}: {e}") from e

        if not 200 <= resp.status_code < 300:
            # 4xx other than 429 will not get better on retry
            retryable = resp.status_code >= 500 or resp.status_code == 429
            raise RetrievalFailed(
                f"Evidence backend returned HTTP {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
                retryable=retryable,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise RetrievalFailed("Evidence backend returned invalid JSON", status_code=resp.status_code, retryable=False) from e

        return parse_context_payload(payload)
