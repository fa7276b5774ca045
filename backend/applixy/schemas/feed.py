"""Feed Schemas — response shapes for the Discover and Saved screens.

Invariants:
    - deadline serialized as ISO date (YYYY-MM-DD)
    - FeedResponse.current is None exactly when caught_up is True
"""

from datetime import date

from pydantic import BaseModel, Field

from applixy.core.domain_types import SwipeAction
from applixy.core.entities import Opportunity
from applixy.core.feed_state import FeedState, current


class OpportunityOut(BaseModel):
    id: str
    title: str
    kind: str
    icon: str
    deadline: date
    award_amount: str
    organization: str
    is_active: bool
    eligibility: str
    details: str
    link: str
    tags: list[str]

    @classmethod
    def from_entity(cls, o: Opportunity) -> "OpportunityOut":
        return cls(
            id=o.id, title=o.title, kind=o.kind, icon=o.icon,
            deadline=o.deadline, award_amount=o.award_amount,
            organization=o.organization, is_active=o.is_active,
            eligibility=o.eligibility, details=o.details, link=o.link,
            tags=list(o.tags),
        )


class FeedResponse(BaseModel):
    current: OpportunityOut | None
    caught_up: bool
    cursor: int
    total: int
    remaining: int
    snapshot_version: int
    subscribed: bool = False
    error: str | None = None

    @classmethod
    def from_state(cls, state: FeedState, subscribed: bool = False) -> "FeedResponse":
        card = current(state)
        return cls(
            current=OpportunityOut.from_entity(card) if card else None,
            caught_up=state.caught_up,
            cursor=state.cursor,
            total=len(state.items),
            remaining=state.remaining,
            snapshot_version=state.snapshot_version,
            subscribed=subscribed,
            error=state.last_error,
        )


class SwipeRequest(BaseModel):
    """Drag translation in screen points (y grows downward)."""
    dx: float = Field(ge=-10_000, le=10_000)
    dy: float = Field(ge=-10_000, le=10_000)


class SwipeResponse(BaseModel):
    action: SwipeAction
    feed: FeedResponse


class SaveRequest(BaseModel):
    """Save a specific card; omitted id means the current card."""
    opportunity_id: str | None = None


class SavedListResponse(BaseModel):
    items: list[OpportunityOut]
    count: int
