"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DocumentId, UserId wrap store-assigned strings — never reassigned
    - OpportunityKind is a closed set (scholarship | college | program)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", str)
UserId = NewType("UserId", str)


# ─── Collections ─────────────────────────────────────────────────

class Collection(str, Enum):
    """Well-known collections in the remote document store."""
    SCHOLARSHIP = "scholarship"
    MENTORS = "mentors"
    MENTOR = "mentor"
    RESOURCES = "resources"


# ─── Opportunity Kind ────────────────────────────────────────────

class OpportunityKind(str, Enum):
    """Closed set used for icon selection."""
    SCHOLARSHIP = "scholarship"
    COLLEGE = "college"
    PROGRAM = "program"


KIND_ICONS: dict[str, str] = {
    OpportunityKind.SCHOLARSHIP.value: "dollarsign.circle.fill",
    OpportunityKind.COLLEGE.value: "building.2.fill",
    OpportunityKind.PROGRAM.value: "graduationcap.fill",
}
FALLBACK_KIND_ICON = "star.fill"


def kind_icon(kind: str) -> str:
    """Symbolic icon name for an opportunity kind (case-insensitive)."""
    return KIND_ICONS.get(kind.lower(), FALLBACK_KIND_ICON)


# ─── Swipe Actions ───────────────────────────────────────────────

class SwipeAction(str, Enum):
    """Outcome of a drag gesture on the top card."""
    SAVE = "save"
    SKIP = "skip"
    DETAILS = "details"
    NONE = "none"


# ─── Mapping Defaults ────────────────────────────────────────────

DEFAULT_OPPORTUNITY_TITLE = "Untitled"
DEFAULT_SCHOLARSHIP_TITLE = "Scholarship"
DEFAULT_MENTOR_NAME = "Mentor"
DEFAULT_RESOURCE_TITLE = "Resource"
DEFAULT_MENTOR_SPECIALTY = "Mentoring"
DEFAULT_RESOURCE_CATEGORY = "General"
DEFAULT_RESOURCE_ICON = "link"
AWARD_AMOUNT_SENTINEL = "—"

MIN_MENTOR_RATING = 0.0
MAX_MENTOR_RATING = 5.0
DEFAULT_MENTOR_RATING = 0.0

# Field the store fills with its own clock on write
SERVER_TIMESTAMP_FIELD = "timestamp"
