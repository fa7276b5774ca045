"""Sample Data Seeder — writes through the gateway, skips non-empty collections."""

from applixy.core.field_mapper import map_scholarship
from applixy.core.repository_protocols import Query
from applixy.seed import SAMPLE_MENTORS, SAMPLE_OPPORTUNITIES, SAMPLE_RESOURCES, seed
from applixy.services.submission_gateway import SubmissionGateway
from tests.fakes import FakeIdentity, InMemoryDocumentStore


async def test_seed_fills_empty_collections():
    store = InMemoryDocumentStore()
    written = await seed(store, SubmissionGateway(store, FakeIdentity("admin")))
    assert written == {
        "scholarship": len(SAMPLE_OPPORTUNITIES),
        "mentors": len(SAMPLE_MENTORS),
        "resources": len(SAMPLE_RESOURCES),
    }


async def test_seed_skips_populated_collections_unless_forced():
    store = InMemoryDocumentStore()
    gateway = SubmissionGateway(store, FakeIdentity("admin"))
    await seed(store, gateway)

    assert (await seed(store, gateway))["scholarship"] == 0
    assert (await seed(store, gateway, force=True))["scholarship"] == len(SAMPLE_OPPORTUNITIES)


async def test_seeded_opportunities_map_without_title_defaults():
    store = InMemoryDocumentStore()
    await seed(store, SubmissionGateway(store, FakeIdentity("admin")))
    for doc in await store.fetch(Query("scholarship")):
        result = map_scholarship(doc)
        assert "title" not in result.defaulted
        assert "deadline" not in result.defaulted
