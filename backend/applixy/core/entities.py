"""Entities — strongly-typed view models decoded from loosely-typed store documents.

Invariants:
    - Entities are immutable (frozen): the client never mutates a record,
      it replaces its whole local view on a fresh snapshot
    - Opportunity.deadline is never None
    - RawDocument.data is the store payload as-is (string keys, unknown values)
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Generic, TypeVar

from applixy.core.domain_types import DocumentId, kind_icon


@dataclass(frozen=True)
class RawDocument:
    """One document as delivered by the store."""
    id: DocumentId
    data: dict[str, Any]
    collection: str = ""


# Complete result set of a query at a point in time
Snapshot = list[RawDocument]


@dataclass(frozen=True)
class Opportunity:
    id: str
    title: str
    kind: str
    deadline: date
    award_amount: str
    organization: str = ""
    is_active: bool = False
    eligibility: str = ""
    details: str = ""
    link: str = ""
    tags: tuple[str, ...] = ()

    @property
    def icon(self) -> str:
        return kind_icon(self.kind)


@dataclass(frozen=True)
class Mentor:
    id: str
    name: str
    specialty: str
    bio: str = ""
    experience: str = ""
    contact_info: str = ""
    rating: float = 0.0
    sessions_completed: int = 0


@dataclass(frozen=True)
class Resource:
    id: str
    title: str
    description: str = ""
    url: str = ""
    category: str = ""
    icon: str = ""
    is_external: bool = True


T = TypeVar("T")


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """A decoded entity plus the names of fields that fell back to defaults."""
    entity: T
    defaulted: tuple[str, ...] = field(default_factory=tuple)

    @property
    def was_defaulted(self) -> bool:
        return bool(self.defaulted)
