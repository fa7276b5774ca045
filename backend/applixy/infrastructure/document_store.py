"""SQL Document Store — collections of schema-less documents on async SQLAlchemy.

Invariants:
    - add() assigns the id and replaces SERVER_TIMESTAMP sentinels with the store clock
    - Ordering by the server timestamp field uses created_at; ties break on id
    - subscribe() emits the first snapshot immediately, then only when the
      collection's content fingerprint changes
    - A local add() wakes every open subscription on that collection at once;
      other writers are picked up within poll_interval
    - A store failure ends the subscription with TransportError; closing the
      iterator (aclose / task cancellation) unregisters it

Design Decisions:
    - Polling + in-process wakeups over database notifications: works the same
      on PostgreSQL and SQLite
"""

import asyncio
import hashlib
import json
import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select

from applixy.core.domain_types import SERVER_TIMESTAMP_FIELD, DocumentId
from applixy.core.entities import RawDocument, Snapshot
from applixy.core.errors import TransportError
from applixy.core.repository_protocols import Query
from applixy.core.submission import ServerTimestamp
from applixy.infrastructure.database import DatabaseSessionManager
from applixy.models.document import StoredDocument, new_document_id

logger = logging.getLogger(__name__)


def _resolve_server_values(data: dict[str, Any], now: datetime) -> dict[str, Any]:
    return {
        key: now.isoformat() if isinstance(value, ServerTimestamp) else value
        for key, value in data.items()
    }


def _to_raw(row: StoredDocument) -> RawDocument:
    return RawDocument(id=DocumentId(row.id), data=dict(row.data or {}), collection=row.collection)


def _sort_key(field: str):
    def key(doc: RawDocument):
        value = doc.data.get(field)
        # None sorts last ascending; mixed types compare as strings
        return (value is None, "" if value is None else str(value), doc.id)
    return key


def snapshot_fingerprint(snapshot: Snapshot) -> str:
    """Stable digest of ids + payloads, used to detect changes between polls."""
    digest = hashlib.sha256()
    for doc in snapshot:
        digest.update(doc.id.encode())
        digest.update(json.dumps(doc.data, sort_keys=True, default=str).encode())
    return digest.hexdigest()


class SqlDocumentStore:
    """DocumentStore implementation backed by the `documents` table."""

    def __init__(self, manager: DatabaseSessionManager, poll_interval: float = 2.0):
        self._manager = manager
        self._poll_interval = poll_interval
        self._wakeups: dict[str, set[asyncio.Event]] = defaultdict(set)

    async def get(self, collection: str, document_id: str) -> RawDocument | None:
        async with self._manager.session() as db:
            row = await db.get(StoredDocument, document_id)
        if row is None or row.collection != collection:
            return None
        return _to_raw(row)

    async def fetch(self, query: Query) -> Snapshot:
        stmt = select(StoredDocument).where(
            StoredDocument.collection == query.collection,
        )
        by_timestamp = query.order_by in (None, SERVER_TIMESTAMP_FIELD)
        if by_timestamp:
            if query.descending:
                stmt = stmt.order_by(StoredDocument.created_at.desc(), StoredDocument.id.desc())
            else:
                stmt = stmt.order_by(StoredDocument.created_at.asc(), StoredDocument.id.asc())
        async with self._manager.session() as db:
            result = await db.execute(stmt)
            rows = result.scalars().all()
        snapshot = [_to_raw(row) for row in rows]
        if not by_timestamp:
            snapshot.sort(key=_sort_key(query.order_by), reverse=query.descending)
        return snapshot

    async def add(self, collection: str, data: dict[str, Any]) -> DocumentId:
        now = datetime.now(timezone.utc)
        row = StoredDocument(
            id=new_document_id(),
            collection=collection,
            data=_resolve_server_values(data, now),
            created_at=now,
        )
        async with self._manager.session() as db:
            db.add(row)
            await db.commit()
        logger.info(
            "Document added",
            extra={"collection": collection, "document_id": row.id},
        )
        self._notify(collection)
        return DocumentId(row.id)

    def _notify(self, collection: str) -> None:
        for event in self._wakeups.get(collection, ()):
            event.set()

    async def subscribe(self, query: Query) -> AsyncIterator[Snapshot]:
        """Live query: yields full snapshots until closed or the store fails."""
        wakeup = asyncio.Event()
        self._wakeups[query.collection].add(wakeup)
        last_fingerprint: str | None = None
        try:
            while True:
                wakeup.clear()
                try:
                    snapshot = await self.fetch(query)
                except TransportError as e:
                    e.context.collection = query.collection
                    raise
                fingerprint = snapshot_fingerprint(snapshot)
                if fingerprint != last_fingerprint:
                    last_fingerprint = fingerprint
                    yield snapshot
                try:
                    await asyncio.wait_for(wakeup.wait(), timeout=self._poll_interval)
                except asyncio.TimeoutError:
                    pass
        finally:
            self._wakeups[query.collection].discard(wakeup)
            if not self._wakeups[query.collection]:
                self._wakeups.pop(query.collection, None)

    @property
    def open_subscriptions(self) -> int:
        return sum(len(events) for events in self._wakeups.values())