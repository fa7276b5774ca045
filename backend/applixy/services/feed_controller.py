"""Opportunity Feed Controller — live opportunity list plus swipe cursor.

Invariants:
    - Each store snapshot replaces the whole list and resets the cursor to 0
    - State swaps are atomic: readers see the old FeedState or the new one, never a mix
    - A transport failure keeps the last-known items and is re-raised to the caller
    - save() goes through the SavedRegistry (idempotent by id), then advances
    - cancel() closes the store subscription; a new subscribe()/start() reopens it
    - When the last stream reader leaves, the background subscription stops

Design Decisions:
    - Core reducers (core/feed_state.py) do every state transition; this class
      only sequences IO around them
    - changes() lets any number of readers (SSE streams) follow state updates
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import aclosing
from datetime import date

from applixy.core import feed_state as reducers
from applixy.core.domain_types import Collection, SERVER_TIMESTAMP_FIELD, SwipeAction
from applixy.core.entities import Opportunity
from applixy.core.errors import TransportError
from applixy.core.feed_state import FeedState
from applixy.core.field_mapper import Mapper, map_scholarship
from applixy.core.repository_protocols import DocumentStore, Query
from applixy.core.saved_registry import SavedRegistry
from applixy.core.swipe import classify_swipe
from applixy.services.snapshot_decoder import decode_snapshot

logger = logging.getLogger(__name__)

DEFAULT_FEED_QUERY = Query(
    collection=Collection.SCHOLARSHIP.value,
    order_by=SERVER_TIMESTAMP_FIELD,
    descending=True,
)


class OpportunityFeedController:
    """Owns one user's FeedState and SavedRegistry."""

    def __init__(
        self,
        store: DocumentStore,
        registry: SavedRegistry | None = None,
        query: Query = DEFAULT_FEED_QUERY,
        mapper: Mapper = map_scholarship,
    ):
        self._store = store
        self.registry = registry if registry is not None else SavedRegistry()
        self.query = query
        self._mapper = mapper
        self.state = FeedState()
        self.error: TransportError | None = None
        self._changed = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._readers = 0
        self.last_used = time.monotonic()

    # --- State ----------------------------------------------------------------

    def _set_state(self, state: FeedState) -> None:
        self.state = state
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

    def current(self) -> Opportunity | None:
        return reducers.current(self.state)

    @property
    def caught_up(self) -> bool:
        return self.state.caught_up

    def apply_snapshot(self, opportunities: list[Opportunity]) -> FeedState:
        self.error = None
        self._set_state(reducers.apply_snapshot(self.state, opportunities))
        return self.state

    # --- Card actions ---------------------------------------------------------

    def advance(self) -> FeedState:
        self._set_state(reducers.advance(self.state))
        return self.state

    def skip(self) -> FeedState:
        self._set_state(reducers.skip(self.state))
        return self.state

    def save(self, opportunity: Opportunity | None = None) -> bool:
        """Save the given opportunity (default: the current card), then advance.

        Returns False when there is nothing to save (caught up).
        """
        target = opportunity or self.current()
        if target is None:
            return False
        if self.registry.save(target):
            logger.info("Opportunity saved", extra={"document_id": target.id})
        self.advance()
        return True

    def swipe(self, dx: float, dy: float) -> SwipeAction:
        """Apply a drag gesture to the current card."""
        action = classify_swipe(dx, dy)
        if self.current() is None:
            return SwipeAction.NONE
        if action is SwipeAction.SAVE:
            self.save()
        elif action is SwipeAction.SKIP:
            self.skip()
        return action

    # --- Subscription ---------------------------------------------------------

    async def subscribe(self, today: date | None = None) -> AsyncIterator[FeedState]:
        """Open the live query; yield the new FeedState after every snapshot.

        Raises TransportError when the store fails (items are kept).
        """
        try:
            async with aclosing(self._store.subscribe(self.query)) as snapshots:
                async for snapshot in snapshots:
                    decoded = decode_snapshot(snapshot, self._mapper, today)
                    self.apply_snapshot(decoded.entities)
                    logger.info(
                        "Feed snapshot applied",
                        extra={
                            "collection": self.query.collection,
                            "snapshot_size": len(decoded.entities),
                        },
                    )
                    yield self.state
        except TransportError as e:
            self.error = e
            self._set_state(reducers.record_error(self.state, e.message))
            logger.error(
                f"Feed subscription failed: {e.message}",
                extra={"error_code": e.code, "collection": self.query.collection},
            )
            raise

    async def _consume(self) -> None:
        try:
            async for _ in self.subscribe():
                pass
        except TransportError:
            # already recorded on self.error / state.last_error
            return

    def start(self) -> asyncio.Task:
        """Run the subscription in the background (no-op while one is running)."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._consume())
        return self._task

    @property
    def is_subscribed(self) -> bool:
        return self._task is not None and not self._task.done()

    def stop(self) -> None:
        """Cancel the background subscription without waiting for it to finish."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def cancel(self) -> None:
        """Stop delivering snapshots and release the store subscription."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def changes(self) -> AsyncIterator[FeedState]:
        """Yield the current state, then every later state (until closed)."""
        while True:
            changed = self._changed
            yield self.state
            await changed.wait()

    async def wait_for_snapshot(self, timeout: float) -> FeedState:
        """Wait up to timeout seconds for the first snapshot or error."""

        async def first_snapshot() -> FeedState:
            async with aclosing(self.changes()) as states:
                async for state in states:
                    if state.snapshot_version or state.last_error:
                        return state
            return self.state

        try:
            return await asyncio.wait_for(first_snapshot(), timeout)
        except asyncio.TimeoutError:
            return self.state

    # --- Readers and idleness -------------------------------------------------

    def touch(self) -> None:
        self.last_used = time.monotonic()

    def idle_for(self, now: float | None = None) -> float:
        """Seconds since the last request, or 0 while a stream is attached."""
        if self._readers:
            return 0.0
        return (now if now is not None else time.monotonic()) - self.last_used

    @property
    def readers(self) -> int:
        return self._readers

    async def follow(self) -> AsyncIterator[FeedState]:
        """changes() for one stream reader; the last reader to leave stops
        the background subscription."""
        self._readers += 1
        self.touch()
        try:
            async with aclosing(self.changes()) as states:
                async for state in states:
                    yield state
        finally:
            self._readers -= 1
            self.touch()
            if not self._readers:
                logger.info(
                    "Last feed reader left, stopping subscription",
                    extra={"collection": self.query.collection},
                )
                self.stop()
