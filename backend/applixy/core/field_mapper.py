"""Field Mapper — decodes loosely-typed store documents into typed entities.

Invariants:
    - Mappers never hard-fail on missing/renamed/mistyped fields: they degrade to defaults
    - Every fallback is recorded in DecodeResult.defaulted (field names, in entity order)
    - Fallback keys are tried in fixed order; a blank string counts as absent
    - MappingSkipped is raised only when the payload is not a mapping at all

Rules:
    - title:        name → title → type-specific default
    - award_amount: number → "$<int>", non-blank string → unchanged, else "—"
    - organization: organization → ""
    - is_active:    active (bool) → False
    - tags:         target_demographic (list) → tags (list) → []
    - eligibility:  eligibility → tags joined with ", "
    - link:         website → link → ""
    - specialty:    list joined with ", " | string trimmed | "Mentoring"
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Callable

from applixy.core.deadline_parser import try_parse_deadline
from applixy.core.domain_types import (
    AWARD_AMOUNT_SENTINEL,
    DEFAULT_MENTOR_NAME,
    DEFAULT_MENTOR_RATING,
    DEFAULT_MENTOR_SPECIALTY,
    DEFAULT_OPPORTUNITY_TITLE,
    DEFAULT_RESOURCE_CATEGORY,
    DEFAULT_RESOURCE_ICON,
    DEFAULT_RESOURCE_TITLE,
    DEFAULT_SCHOLARSHIP_TITLE,
    MAX_MENTOR_RATING,
    MIN_MENTOR_RATING,
    OpportunityKind,
)
from applixy.core.entities import DecodeResult, Mentor, Opportunity, RawDocument, Resource
from applixy.core.errors import ErrorContext, MappingSkipped


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never an amount
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def format_award_amount(value: Any) -> str | None:
    """Render an award amount for display; None when the value has no usable shape."""
    if _is_number(value):
        return f"${int(value)}"
    if isinstance(value, str) and value.strip():
        return value
    return None


def join_specialty(value: Any) -> str:
    """Specialty from a list of strings or a single string; "" when neither."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        parts = [v.strip() for v in value if isinstance(v, str) and v.strip()]
        return ", ".join(parts)
    return ""


class _FieldReader:
    """Reads typed values from one raw record, noting every fallback."""

    def __init__(self, data: Mapping[str, Any]):
        self.data = data
        self.defaulted: list[str] = []

    def fallback(self, field: str, value):
        self.defaulted.append(field)
        return value

    def text(self, field: str, *keys: str, default: str = "") -> str:
        for key in keys:
            value = self.data.get(key)
            if isinstance(value, str) and value.strip():
                return value
        return self.fallback(field, default)

    def string_list(self, field: str, *keys: str) -> tuple[str, ...]:
        for key in keys:
            value = self.data.get(key)
            if isinstance(value, (list, tuple)):
                return tuple(v for v in value if isinstance(v, str))
        return self.fallback(field, ())

    def number(self, field: str, *keys: str) -> float | None:
        for key in keys:
            value = self.data.get(key)
            if _is_number(value):
                return float(value)
        self.defaulted.append(field)
        return None

    def flag(self, field: str, *keys: str, default: bool) -> bool:
        for key in keys:
            value = self.data.get(key)
            if isinstance(value, bool):
                return value
        return self.fallback(field, default)

    def award(self, field: str, *keys: str) -> str:
        for key in keys:
            rendered = format_award_amount(self.data.get(key))
            if rendered is not None:
                return rendered
        return self.fallback(field, AWARD_AMOUNT_SENTINEL)

    def deadline(self, field: str, *keys: str, today: date | None) -> date:
        for key in keys:
            value = self.data.get(key)
            if isinstance(value, datetime):
                return value.date()
            if isinstance(value, date):
                return value
            if isinstance(value, str):
                parsed = try_parse_deadline(value, today)
                if parsed is not None:
                    return parsed
        return self.fallback(field, today or date.today())

    def kind(self, field: str, *keys: str) -> str:
        for key in keys:
            value = self.data.get(key)
            if isinstance(value, str):
                try:
                    return OpportunityKind(value.strip().lower()).value
                except ValueError:
                    continue
        return self.fallback(field, OpportunityKind.SCHOLARSHIP.value)


def _reader(document: RawDocument) -> _FieldReader:
    if not isinstance(document.data, Mapping):
        raise MappingSkipped(
            f"payload is {type(document.data).__name__}, not a mapping",
            ErrorContext(collection=document.collection, document_id=document.id),
        )
    return _FieldReader(document.data)


def _map_opportunity(
    document: RawDocument, default_title: str, today: date | None,
) -> DecodeResult[Opportunity]:
    r = _reader(document)
    title = r.text("title", "name", "title", default=default_title)
    kind = r.kind("kind", "kind", "type")
    deadline = r.deadline("deadline", "application_deadline", "deadline", today=today)
    award_amount = r.award("award_amount", "award_amount", "awardAmount")
    organization = r.text("organization", "organization")
    is_active = r.flag("is_active", "active", default=False)
    tags = r.string_list("tags", "target_demographic", "tags")
    eligibility = r.text("eligibility", "eligibility", default=", ".join(tags))
    details = r.text("details", "description", "details")
    link = r.text("link", "website", "link")
    return DecodeResult(
        Opportunity(
            id=document.id,
            title=title,
            kind=kind,
            deadline=deadline,
            award_amount=award_amount,
            organization=organization,
            is_active=is_active,
            eligibility=eligibility,
            details=details,
            link=link,
            tags=tags,
        ),
        tuple(r.defaulted),
    )


def map_scholarship(
    document: RawDocument, today: date | None = None,
) -> DecodeResult[Opportunity]:
    """Map a `scholarship` collection document; title defaults to "Scholarship"."""
    return _map_opportunity(document, DEFAULT_SCHOLARSHIP_TITLE, today)


def map_opportunity(
    document: RawDocument, today: date | None = None,
) -> DecodeResult[Opportunity]:
    """Map a generic opportunity document; title defaults to "Untitled"."""
    return _map_opportunity(document, DEFAULT_OPPORTUNITY_TITLE, today)


def map_mentor(document: RawDocument, today: date | None = None) -> DecodeResult[Mentor]:
    r = _reader(document)
    name = r.text("name", "name", "title", default=DEFAULT_MENTOR_NAME)

    specialty = join_specialty(r.data.get("specialty"))
    if not specialty:
        specialty = r.fallback("specialty", DEFAULT_MENTOR_SPECIALTY)

    bio = r.text("bio", "description", "bio")
    experience = r.text("experience", "experience")
    contact_info = r.text("contact_info", "email", "phone", "phone_number")

    rating = r.number("rating", "rating")
    if rating is None:
        rating = DEFAULT_MENTOR_RATING
    elif not MIN_MENTOR_RATING <= rating <= MAX_MENTOR_RATING:
        rating = r.fallback("rating", min(max(rating, MIN_MENTOR_RATING), MAX_MENTOR_RATING))

    sessions = r.number("sessions_completed", "sessions_completed", "sessionsCompleted")
    if sessions is None:
        sessions_completed = 0
    elif sessions < 0:
        sessions_completed = r.fallback("sessions_completed", 0)
    else:
        sessions_completed = int(sessions)

    return DecodeResult(
        Mentor(
            id=document.id,
            name=name,
            specialty=specialty,
            bio=bio,
            experience=experience,
            contact_info=contact_info,
            rating=rating,
            sessions_completed=sessions_completed,
        ),
        tuple(r.defaulted),
    )


def map_resource(document: RawDocument, today: date | None = None) -> DecodeResult[Resource]:
    r = _reader(document)
    return DecodeResult(
        Resource(
            id=document.id,
            title=r.text("title", "name", "title", default=DEFAULT_RESOURCE_TITLE),
            description=r.text("description", "description"),
            url=r.text("url", "link", "url"),
            category=r.text("category", "category", default=DEFAULT_RESOURCE_CATEGORY),
            icon=r.text("icon", "icon", default=DEFAULT_RESOURCE_ICON),
            is_external=r.flag("is_external", "isExternal", "is_external", default=True),
        ),
        tuple(r.defaulted),
    )


Mapper = Callable[[RawDocument, date | None], DecodeResult]

# Entity name → mapper (explicit dict, no auto-discovery)
MAPPERS: dict[str, Mapper] = {
    "scholarship": map_scholarship,
    "opportunity": map_opportunity,
    "mentor": map_mentor,
    "resource": map_resource,
}


def decode(document: RawDocument, target: str, today: date | None = None) -> DecodeResult:
    """Decode a document into the named target entity type."""
    try:
        mapper = MAPPERS[target]
    except KeyError:
        raise ValueError(f"Unknown target entity type: {target}") from None
    return mapper(document, today)
