# src/stance_rag/session/store.py

from __future__ import annotations

from typing import Dict, Optional, Protocol

from stance_rag.session.state import SearchSession


class SessionStore(Protocol):
    """Opaque get/set of whole SearchSession values keyed by conversation id.

    There is no partial-update contract: callers always write a full snapshot.

    Example implementation backed by Redis:

        class RedisSessionStore:
            def __init__(self, client):
                self.client = client

            def get(self, conversation_id):
                raw = self.client.get(f"stance_rag:{conversation_id}")
                return SearchSession.model_validate_json(raw) if raw else None

            def set(self, conversation_id, session):
                self.client.set(f"stance_rag:{conversation_id}", session.model_dump_json())
    """

    def get(self, conversation_id: str) -> Optional[SearchSession]:
        raise NotImplementedError

    def set(self, conversation_id: str, session: SearchSession) -> None:
        raise NotImplementedError

    def delete(self, conversation_id: str) -> None:
        raise NotImplementedError


class InMemorySessionStore:
    """Keeps serialized snapshots in a dict owned by the instance."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, conversation_id: str) -> Optional[SearchSession]:
        raw = self._data.get(conversation_id)
        if raw is None:
            return None
        return SearchSession.model_validate_json(raw)

    def set(self, conversation_id: str, session: SearchSession) -> None:
        self._data[conversation_id] = session.model_dump_json()

    def delete(self, conversation_id: str) -> None:
        self._data.pop(conversation_id, None)
