"""Directory Service — merged mentor collections, resources, opportunity lookups."""

import pytest

from applixy.core.errors import ResourceNotFoundError, TransportError
from applixy.services.directory_service import DirectoryService
from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def store():
    s = InMemoryDocumentStore()
    s.put("mentors", "m1", {"name": "Dr. Chen", "specialty": ["STEM", "Essays"], "email": "c@x.org"})
    s.put("mentors", "m2", {"name": "Marcus", "specialty": "Scholarships", "phone": "555"})
    s.put("mentor", "m2", {"name": "Duplicate Marcus"})
    s.put("mentor", "m3", {"title": "Legacy", "phone_number": "777"})
    s.put("resources", "r1", {"name": "FAFSA", "link": "https://studentaid.gov"})
    s.put("scholarship", "s1", {"name": "Gates", "award_amount": 5000})
    s.put("internships", "i1", {"title": "Summer"})
    return s


async def test_mentors_merge_collections_first_wins(store):
    mentors = await DirectoryService(store).mentors()
    by_id = {m.id: m for m in mentors}
    assert set(by_id) == {"m1", "m2", "m3"}
    assert by_id["m2"].name == "Marcus"
    assert by_id["m1"].specialty == "STEM, Essays"
    assert by_id["m3"].contact_info == "777"


async def test_resources(store):
    resources = await DirectoryService(store).resources()
    assert [(r.title, r.url, r.is_external) for r in resources] == [
        ("FAFSA", "https://studentaid.gov", True),
    ]


async def test_opportunity_lookup_uses_collection_mapper(store):
    service = DirectoryService(store)
    assert (await service.opportunity("scholarship", "s1")).award_amount == "$5000"
    assert (await service.opportunity("internships", "i1")).title == "Summer"


async def test_generic_collection_title_default(store):
    store.put("internships", "i2", {})
    items = await DirectoryService(store).opportunities("internships")
    assert {o.title for o in items} == {"Summer", "Untitled"}


async def test_unknown_opportunity_raises_not_found(store):
    with pytest.raises(ResourceNotFoundError):
        await DirectoryService(store).opportunity("scholarship", "nope")


async def test_store_failure_propagates(store):
    store.fail_with = TransportError("down", "fetch")
    with pytest.raises(TransportError):
        await DirectoryService(store).mentors()
