"""Directory & Submission Routes — forms, listings, error mapping."""

import pytest

from applixy.api.dependencies import get_store
from applixy.core.errors import TransportError
from applixy.main import app
from tests.fakes import InMemoryDocumentStore


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200


async def test_submit_mentor_and_list(client):
    res = await client.post("/api/v1/submissions/mentors", json={
        "name": "Dr. Chen", "specialty": ["STEM", "Essays"], "email": "chen@example.com",
    })
    assert res.status_code == 201
    assert res.json()["collection"] == "mentors"

    mentors = (await client.get("/api/v1/mentors")).json()
    assert len(mentors) == 1
    assert mentors[0]["specialty"] == "STEM, Essays"
    assert mentors[0]["contact_info"] == "chen@example.com"
    assert mentors[0]["rating"] == 0.0


async def test_submit_resource_and_list(client):
    res = await client.post("/api/v1/submissions/resources", json={
        "name": "FAFSA", "link": "https://studentaid.gov", "category": "Financial Aid",
    })
    assert res.status_code == 201
    resources = (await client.get("/api/v1/resources")).json()
    assert resources[0]["title"] == "FAFSA"
    assert resources[0]["is_external"] is True


async def test_missing_required_fields_is_400(client):
    res = await client.post("/api/v1/submissions/opportunities", json={"name": "Gates"})
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_FAILED"
    assert "organization" in body["message"]


@pytest.mark.parametrize("payload", [
    {"description": "no name, no org", "category": "resources"},
    {"name": "Intern Grant", "organization": "Org", "category": "mentors"},
])
async def test_opportunity_form_cannot_write_into_other_collections(client, payload):
    res = await client.post("/api/v1/submissions/opportunities", json=payload)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_FAILED"

    assert (await client.get("/api/v1/resources")).json() == []
    assert (await client.get("/api/v1/mentors")).json() == []


async def test_opportunity_detail_and_category(client):
    res = await client.post("/api/v1/submissions/opportunities", json={
        "name": "Summer Lab", "organization": "MIT", "type": "program",
        "application_deadline": "12/30/2025", "category": "internships",
    })
    assert res.json()["collection"] == "internships"
    doc_id = res.json()["id"]

    detail = (await client.get(f"/api/v1/opportunities/{doc_id}?collection=internships")).json()
    assert detail["deadline"] == "2025-12-30"
    assert detail["kind"] == "program"
    assert detail["organization"] == "MIT"
    assert detail["is_active"] is True

    listing = (await client.get("/api/v1/opportunities?collection=internships")).json()
    assert [o["id"] for o in listing] == [doc_id]

    res = await client.get(f"/api/v1/opportunities/{doc_id}")
    assert res.status_code == 404


async def test_store_outage_is_503(client):
    store = InMemoryDocumentStore()
    store.fail_with = TransportError("connection refused", "add")
    app.dependency_overrides[get_store] = lambda: store

    res = await client.post("/api/v1/submissions/resources", json={"name": "FAFSA"})
    assert res.status_code == 503
    assert res.headers["Retry-After"] == "5"
    assert res.json()["error"]["code"] == "TRANSPORT_ERROR"

    res = await client.get("/api/v1/mentors")
    assert res.status_code == 503
