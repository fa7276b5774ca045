"""Submission Documents — required fields, cleaning, server timestamp sentinel."""

import pytest

from applixy.core.errors import ValidationFailedError
from applixy.core.submission import (
    MENTOR_REQUIRED, OPPORTUNITY_REQUIRED, RESOURCE_REQUIRED, SERVER_TIMESTAMP,
    ServerTimestamp, build_document, missing_required, opportunity_collection,
    required_fields_for,
)


def test_required_fields_by_collection():
    assert required_fields_for("scholarship") == OPPORTUNITY_REQUIRED
    assert required_fields_for("internships") == OPPORTUNITY_REQUIRED
    assert required_fields_for("mentors") == MENTOR_REQUIRED
    assert required_fields_for("mentor") == MENTOR_REQUIRED
    assert required_fields_for("resources") == RESOURCE_REQUIRED


def test_missing_opportunity_fields_listed_in_order():
    with pytest.raises(ValidationFailedError) as exc:
        build_document("scholarship", {"description": "x"})
    assert exc.value.fields == ["name", "organization"]
    assert exc.value.http_status == 400
    assert "name" in exc.value.context.user_message


def test_blank_strings_count_as_missing():
    assert missing_required(
        {"name": "  ", "specialty": [" "], "email": "a@b.c"}, MENTOR_REQUIRED,
    ) == ["name", "specialty"]


def test_mentor_specialty_list_is_accepted():
    doc = build_document("mentors", {
        "name": "Dr. Chen", "specialty": ["STEM", "Essays"], "email": "c@x.org",
    })
    assert doc["specialty"] == ["STEM", "Essays"]


def test_document_gets_timestamp_sentinel_and_active_flag():
    doc = build_document("scholarship", {"name": "N", "organization": "O"})
    assert doc["timestamp"] is SERVER_TIMESTAMP
    assert doc["active"] is True


def test_client_supplied_timestamp_is_replaced():
    doc = build_document("resources", {"name": "R", "timestamp": "1999-01-01"})
    assert isinstance(doc["timestamp"], ServerTimestamp)


def test_explicit_active_flag_is_kept():
    doc = build_document("resources", {"active": False})
    assert doc["active"] is False


def test_strings_are_stripped_and_none_dropped():
    doc = build_document("scholarship", {
        "name": "  Gates ", "organization": "Foundation", "website": None,
    })
    assert doc["name"] == "Gates"
    assert "website" not in doc


@pytest.mark.parametrize("raw, stored", [
    ("5000", 5000),
    ("5,000", 5000),
    (2500, 2500),
    ("Full tuition", "Full tuition"),
])
def test_award_amount_coercion(raw, stored):
    doc = build_document("scholarship", {"name": "N", "organization": "O", "award_amount": raw})
    assert doc["award_amount"] == stored


def test_comma_separated_tags_are_split():
    doc = build_document("scholarship", {
        "name": "N", "organization": "O", "target_demographic": "STEM, Arts ,",
    })
    assert doc["target_demographic"] == ["STEM", "Arts"]


def test_server_timestamp_is_a_singleton():
    assert ServerTimestamp() is SERVER_TIMESTAMP
    assert repr(SERVER_TIMESTAMP) == "SERVER_TIMESTAMP"


def test_explicit_required_overrides_collection_rules():
    with pytest.raises(ValidationFailedError) as exc:
        build_document("resources", {"description": "x"}, OPPORTUNITY_REQUIRED)
    assert exc.value.fields == ["name", "organization"]

    doc = build_document("mentors", {"name": "N", "organization": "O"}, OPPORTUNITY_REQUIRED)
    assert doc["organization"] == "O"


@pytest.mark.parametrize("category, expected", [
    (None, "scholarship"),
    ("", "scholarship"),
    ("  internships ", "internships"),
])
def test_opportunity_collection_picks_category_or_default(category, expected):
    assert opportunity_collection(category, "scholarship") == expected


@pytest.mark.parametrize("category", ["mentors", "mentor", "resources", "Resources"])
def test_opportunity_collection_rejects_reserved_names(category):
    with pytest.raises(ValidationFailedError) as exc:
        opportunity_collection(category, "scholarship")
    assert exc.value.fields == ["category"]
    assert exc.value.http_status == 400
