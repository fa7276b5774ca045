"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - subscribe() yields full snapshots (never diffs); closing the iterator cancels it

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Live queries as async iterators: lazy, unbounded, cancellable,
      restartable by calling subscribe() again
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, Protocol

from applixy.core.domain_types import DocumentId, UserId
from applixy.core.entities import RawDocument, Snapshot


@dataclass(frozen=True)
class Query:
    """A collection query, optionally ordered by one field."""
    collection: str
    order_by: str | None = None
    descending: bool = False


class DocumentStore(Protocol):
    """Contract for the remote document database — implemented by shell."""
    async def get(self, collection: str, document_id: str) -> RawDocument | None: ...
    async def fetch(self, query: Query) -> Snapshot: ...
    async def add(self, collection: str, data: dict[str, Any]) -> DocumentId: ...
    def subscribe(self, query: Query) -> AsyncIterator[Snapshot]: ...


class IdentityProvider(Protocol):
    """Contract for sign-in — yields a stable user identifier."""
    @property
    def current_user(self) -> UserId | None: ...
    async def sign_in_anonymously(self) -> UserId: ...
    async def sign_in(self, email: str, password: str) -> UserId: ...
    async def create_account(self, email: str, password: str) -> UserId: ...
