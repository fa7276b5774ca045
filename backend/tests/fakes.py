"""Test Doubles — in-memory DocumentStore and IdentityProvider implementations.

Invariants:
    - InMemoryDocumentStore follows the SqlDocumentStore contract: ids assigned on
      add, SERVER_TIMESTAMP resolved, every add wakes open subscriptions
    - ScriptedStore.subscribe yields exactly what the test pushes (snapshots or errors)
    - FakeIdentity records every sign-in attempt

Design Decisions:
    - Flat classes (no inheritance): protocols are structural, nothing to subclass
"""

import asyncio
import itertools
from collections import defaultdict
from typing import Any

from applixy.core.domain_types import DocumentId, UserId
from applixy.core.entities import RawDocument
from applixy.core.errors import TransportError
from applixy.core.repository_protocols import Query
from applixy.core.submission import ServerTimestamp


class InMemoryDocumentStore:
    """Dict-backed store. Documents keep insertion order (oldest first)."""

    def __init__(self):
        self.collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.fail_with: TransportError | None = None
        self.adds: list[tuple[str, dict[str, Any]]] = []
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)
        self._wakeups: dict[str, set[asyncio.Event]] = defaultdict(set)

    def put(self, collection: str, document_id: str, data: Any) -> None:
        """Insert a raw document directly (bypasses validation)."""
        self.collections[collection][document_id] = data

    async def get(self, collection: str, document_id: str) -> RawDocument | None:
        if self.fail_with:
            raise self.fail_with
        data = self.collections.get(collection, {}).get(document_id)
        if data is None:
            return None
        return RawDocument(DocumentId(document_id), data, collection)

    async def fetch(self, query: Query) -> list[RawDocument]:
        if self.fail_with:
            raise self.fail_with
        docs = [
            RawDocument(DocumentId(doc_id), data, query.collection)
            for doc_id, data in self.collections.get(query.collection, {}).items()
        ]
        if query.descending:
            docs.reverse()
        return docs

    async def add(self, collection: str, data: dict[str, Any]) -> DocumentId:
        if self.fail_with:
            raise self.fail_with
        document_id = f"doc-{next(self._ids)}"
        stamp = f"2026-01-01T00:00:{next(self._clock):02d}+00:00"
        resolved = {
            k: stamp if isinstance(v, ServerTimestamp) else v for k, v in data.items()
        }
        self.adds.append((collection, data))
        self.collections[collection][document_id] = resolved
        for event in self._wakeups.get(collection, ()):
            event.set()
        return DocumentId(document_id)

    async def subscribe(self, query: Query):
        wakeup = asyncio.Event()
        self._wakeups[query.collection].add(wakeup)
        try:
            while True:
                wakeup.clear()
                yield await self.fetch(query)
                await wakeup.wait()
        finally:
            self._wakeups[query.collection].discard(wakeup)

    @property
    def open_subscriptions(self) -> int:
        return sum(len(events) for events in self._wakeups.values())


class ScriptedStore:
    """subscribe() yields pushed snapshots in order; a pushed exception is raised."""

    def __init__(self):
        self._queue: asyncio.Queue = asyncio.Queue()
        self.subscriptions_opened = 0
        self.subscriptions_closed = 0

    def push(self, item: list[RawDocument] | Exception) -> None:
        self._queue.put_nowait(item)

    async def get(self, collection: str, document_id: str) -> RawDocument | None:
        return None

    async def fetch(self, query: Query) -> list[RawDocument]:
        return []

    async def add(self, collection: str, data: dict[str, Any]) -> DocumentId:
        raise NotImplementedError

    async def subscribe(self, query: Query):
        self.subscriptions_opened += 1
        try:
            while True:
                item = await self._queue.get()
                if isinstance(item, Exception):
                    raise item
                yield item
        finally:
            self.subscriptions_closed += 1


class FakeIdentity:
    def __init__(self, user_id: str | None = None, fail_with: Exception | None = None):
        self._user_id = UserId(user_id) if user_id else None
        self.fail_with = fail_with
        self.anonymous_attempts = 0

    @property
    def current_user(self) -> UserId | None:
        return self._user_id

    async def sign_in_anonymously(self) -> UserId:
        self.anonymous_attempts += 1
        if self.fail_with:
            raise self.fail_with
        self._user_id = UserId("anon-1")
        return self._user_id

    async def sign_in(self, email: str, password: str) -> UserId:
        self._user_id = UserId(email)
        return self._user_id

    async def create_account(self, email: str, password: str) -> UserId:
        return await self.sign_in(email, password)


def scholarship_doc(doc_id: str, name: str, **fields: Any) -> RawDocument:
    return RawDocument(DocumentId(doc_id), {"name": name, **fields}, "scholarship")
