"""Saved-Items Registry — the set of opportunities a user chose to keep.

Invariants:
    - Keyed by opportunity id: at most one entry per id
    - save() is idempotent: an id already present is left untouched
    - remove() on an absent id is a no-op
    - Insertion order is preserved for display
    - No IO: the registry lives in process memory only

Design Decisions:
    - dict keyed by id: O(1) membership and removal, ordered iteration
"""

from dataclasses import dataclass, field

from applixy.core.entities import Opportunity


@dataclass
class SavedRegistry:
    """Per-session saved opportunities — pure dataclass, no IO."""

    _entries: dict[str, Opportunity] = field(default_factory=dict)

    def save(self, item: Opportunity) -> bool:
        """Add item unless its id is already saved. Returns True when added."""
        if item.id in self._entries:
            return False
        self._entries[item.id] = item
        return True

    def remove(self, item: Opportunity | str) -> bool:
        """Remove by opportunity or id. Returns True when an entry was removed."""
        key = item if isinstance(item, str) else item.id
        return self._entries.pop(key, None) is not None

    def get(self, opportunity_id: str) -> Opportunity | None:
        return self._entries.get(opportunity_id)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Opportunity):
            return item.id in self._entries
        return item in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def items(self) -> list[Opportunity]:
        return list(self._entries.values())

    @property
    def ids(self) -> list[str]:
        return list(self._entries)
