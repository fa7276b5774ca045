"""Submission Documents — pure request construction for new listings.

Invariants:
    - Validation happens here, before any IO: missing required fields raise ValidationFailedError
    - Required fields: name + organization (opportunities), name + specialty + email (mentors)
    - Required fields follow the form type, whatever collection an opportunity targets
    - Opportunity categories never name a mentor or resource collection
    - Blank strings count as missing; string values are stripped
    - The creation timestamp is a SERVER_TIMESTAMP sentinel, filled by the store on write

Design Decisions:
    - Sentinel object over client clock: ordering by timestamp must follow the store's clock
"""

from collections.abc import Mapping
from typing import Any

from applixy.core.domain_types import SERVER_TIMESTAMP_FIELD, Collection
from applixy.core.errors import ErrorContext, ValidationFailedError


class ServerTimestamp:
    """Placeholder replaced by the store's own clock when the document is written."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()

OPPORTUNITY_REQUIRED: tuple[str, ...] = ("name", "organization")
MENTOR_REQUIRED: tuple[str, ...] = ("name", "specialty", "email")
RESOURCE_REQUIRED: tuple[str, ...] = ()

MENTOR_COLLECTIONS = frozenset({Collection.MENTORS.value, Collection.MENTOR.value})
RESERVED_CATEGORIES = MENTOR_COLLECTIONS | {Collection.RESOURCES.value}


def opportunity_collection(
    category: str | None,
    default: str,
    reserved: frozenset[str] = RESERVED_CATEGORIES,
) -> str:
    """Target collection for an opportunity form.

    A chosen category may name any collection except the mentor and
    resource ones, which hold other kinds of documents.
    """
    if not category or not category.strip():
        return default
    category = category.strip()
    if category.lower() in reserved:
        raise ValidationFailedError(
            ["category"],
            ErrorContext(
                collection=category,
                user_message=f"'{category}' cannot be used as an opportunity category",
            ),
        )
    return category


def required_fields_for(collection: str) -> tuple[str, ...]:
    """Mentor and resource collections have their own rules; any other
    collection (scholarship or a user-chosen category) holds opportunities.

    Used when only the target collection is known. Form submissions pass
    their own required tuple to build_document instead."""
    if collection in MENTOR_COLLECTIONS:
        return MENTOR_REQUIRED
    if collection == Collection.RESOURCES.value:
        return RESOURCE_REQUIRED
    return OPPORTUNITY_REQUIRED


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return not any(isinstance(v, str) and v.strip() for v in value)
    return False


def missing_required(fields: Mapping[str, Any], required: tuple[str, ...]) -> list[str]:
    return [name for name in required if _is_blank(fields.get(name))]


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return value


def _coerce_award(value: Any) -> Any:
    """Digit-only form input ("5000", "5,000") is stored as a number."""
    if isinstance(value, str):
        digits = value.replace(",", "").strip()
        if digits.isdigit():
            return int(digits)
    return value


def _split_tags(value: Any) -> Any:
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return value


def build_document(
    collection: str,
    fields: Mapping[str, Any],
    required: tuple[str, ...] | None = None,
) -> dict[str, Any]:
    """Validate a form and package it as a store document.

    `required` defaults to the rules of the target collection.
    Raises ValidationFailedError listing every missing required field.
    """
    if required is None:
        required = required_fields_for(collection)
    missing = missing_required(fields, required)
    if missing:
        raise ValidationFailedError(
            missing,
            ErrorContext(
                collection=collection,
                user_message=f"Please fill in: {', '.join(missing)}",
            ),
        )

    document: dict[str, Any] = {}
    for key, value in fields.items():
        if value is None or key == SERVER_TIMESTAMP_FIELD:
            continue
        document[key] = _clean(value)

    if "award_amount" in document:
        document["award_amount"] = _coerce_award(document["award_amount"])
    for key in ("target_demographic", "tags"):
        if key in document:
            document[key] = _clean(_split_tags(fields[key]))

    document.setdefault("active", True)
    document[SERVER_TIMESTAMP_FIELD] = SERVER_TIMESTAMP
    return document
