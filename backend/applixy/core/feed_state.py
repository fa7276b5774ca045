"""Feed State — immutable opportunity feed state and its reducers.

Invariants:
    - items is replaced wholesale per snapshot, never patched incrementally
    - apply_snapshot resets cursor to 0 and clears last_error
    - cursor is monotonic between snapshots: advance() only increments
    - cursor may exceed len(items); reading side reports "caught up"
    - record_error keeps items and cursor (stale-but-present)

Design Decisions:
    - Frozen dataclass + pure reducers: each update returns a new state, so a
      reader never observes a half-applied snapshot
"""

from dataclasses import dataclass, replace

from applixy.core.entities import Opportunity


@dataclass(frozen=True)
class FeedState:
    """Ordered opportunities plus the index of the card shown to the user."""
    items: tuple[Opportunity, ...] = ()
    cursor: int = 0
    snapshot_version: int = 0
    last_error: str | None = None

    @property
    def caught_up(self) -> bool:
        return self.cursor >= len(self.items)

    @property
    def remaining(self) -> int:
        return max(len(self.items) - self.cursor, 0)


def current(state: FeedState) -> Opportunity | None:
    """items[cursor], or None once the user is caught up."""
    if state.cursor < len(state.items):
        return state.items[state.cursor]
    return None


def apply_snapshot(state: FeedState, items: list[Opportunity]) -> FeedState:
    """Swap in a full snapshot. Duplicate ids keep their first occurrence."""
    seen: set[str] = set()
    unique = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return FeedState(
        items=tuple(unique),
        cursor=0,
        snapshot_version=state.snapshot_version + 1,
        last_error=None,
    )


def advance(state: FeedState) -> FeedState:
    return replace(state, cursor=state.cursor + 1)


def skip(state: FeedState) -> FeedState:
    """Same as advance; skips are not remembered."""
    return advance(state)


def record_error(state: FeedState, message: str) -> FeedState:
    return replace(state, last_error=message)
