"""Submission Gateway — validation before IO, anonymous sign-in, no retries.

Invariants:
    - ValidationFailedError raised with zero store writes and zero sign-in attempts
    - No identity → exactly one anonymous sign-in attempt
    - Sign-in failure → AuthRequiredError; store failure → TransportError
"""

import pytest

from applixy.core.errors import AuthRequiredError, TransportError, ValidationFailedError
from applixy.core.repository_protocols import Query
from applixy.services.submission_gateway import SubmissionGateway
from tests.fakes import FakeIdentity, InMemoryDocumentStore

OPPORTUNITY = {"name": "Gates Scholarship", "organization": "Gates Foundation", "award_amount": "5000"}


async def test_submit_writes_document_with_server_timestamp():
    store = InMemoryDocumentStore()
    gateway = SubmissionGateway(store, FakeIdentity("user-1"))

    doc_id = await gateway.submit_opportunity(OPPORTUNITY)

    saved = store.collections["scholarship"][doc_id]
    assert saved["name"] == "Gates Scholarship"
    assert saved["award_amount"] == 5000
    assert saved["timestamp"].startswith("2026-")
    assert saved["active"] is True


async def test_validation_runs_before_any_io():
    store = InMemoryDocumentStore()
    identity = FakeIdentity()
    gateway = SubmissionGateway(store, identity)

    with pytest.raises(ValidationFailedError) as exc:
        await gateway.submit_mentor({"name": "Dr. Chen"})

    assert exc.value.fields == ["specialty", "email"]
    assert store.adds == []
    assert identity.anonymous_attempts == 0


async def test_signs_in_anonymously_when_needed():
    store = InMemoryDocumentStore()
    identity = FakeIdentity()
    gateway = SubmissionGateway(store, identity)

    await gateway.submit_resource({"name": "FAFSA"})
    await gateway.submit_resource({"name": "Common App"})

    assert identity.anonymous_attempts == 1
    assert len(store.collections["resources"]) == 2


async def test_existing_identity_skips_sign_in():
    identity = FakeIdentity("user-1")
    await SubmissionGateway(InMemoryDocumentStore(), identity).submit_opportunity(OPPORTUNITY)
    assert identity.anonymous_attempts == 0


async def test_failed_sign_in_surfaces_auth_required():
    store = InMemoryDocumentStore()
    identity = FakeIdentity(fail_with=TransportError("unreachable", "sign_in"))
    gateway = SubmissionGateway(store, identity)

    with pytest.raises(AuthRequiredError):
        await gateway.submit_opportunity(OPPORTUNITY)
    assert store.adds == []


async def test_disabled_anonymous_sign_in_propagates_auth_required():
    identity = FakeIdentity(fail_with=AuthRequiredError("Anonymous sign-in is disabled"))
    with pytest.raises(AuthRequiredError):
        await SubmissionGateway(InMemoryDocumentStore(), identity).submit_opportunity(OPPORTUNITY)


async def test_store_failure_is_not_retried():
    store = InMemoryDocumentStore()
    store.fail_with = TransportError("connection refused", "add")
    gateway = SubmissionGateway(store, FakeIdentity("user-1"))

    with pytest.raises(TransportError) as exc:
        await gateway.submit_opportunity(OPPORTUNITY)
    assert exc.value.context.collection == "scholarship"
    assert store.adds == []


async def test_category_selects_target_collection():
    store = InMemoryDocumentStore()
    gateway = SubmissionGateway(store, FakeIdentity("user-1"))

    doc_id = await gateway.submit_opportunity(OPPORTUNITY, category="internships")

    assert doc_id in store.collections["internships"]
    assert await store.fetch(Query("scholarship")) == []


async def test_mentor_goes_to_configured_collection():
    store = InMemoryDocumentStore()
    gateway = SubmissionGateway(store, FakeIdentity("u"), mentor_collection="mentor")
    await gateway.submit_mentor({"name": "A", "specialty": "STEM", "email": "a@x.org"})
    assert len(store.collections["mentor"]) == 1


async def test_opportunity_rules_apply_whatever_the_category():
    store = InMemoryDocumentStore()
    gateway = SubmissionGateway(store, FakeIdentity("user-1"))

    with pytest.raises(ValidationFailedError) as exc:
        await gateway.submit_opportunity({"description": "no name"}, category="internships")
    assert exc.value.fields == ["name", "organization"]
    assert store.adds == []


@pytest.mark.parametrize("category", ["resources", "mentors", "mentor"])
async def test_opportunity_cannot_target_mentor_or_resource_collections(category):
    store = InMemoryDocumentStore()
    identity = FakeIdentity()
    gateway = SubmissionGateway(store, identity)

    with pytest.raises(ValidationFailedError) as exc:
        await gateway.submit_opportunity(OPPORTUNITY, category=category)
    assert exc.value.fields == ["category"]
    assert store.adds == []
    assert identity.anonymous_attempts == 0


async def test_configured_mentor_collection_is_reserved_too():
    gateway = SubmissionGateway(
        InMemoryDocumentStore(), FakeIdentity("u"), mentor_collection="advisors",
    )
    with pytest.raises(ValidationFailedError):
        await gateway.submit_opportunity(OPPORTUNITY, category="advisors")
