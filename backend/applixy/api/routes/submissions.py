"""Submission Routes — Add Opportunity, Add Mentor, Add Resource forms.

Invariants:
    - 201 with the new document id on success
    - Missing required fields → 400 before any write (ValidationFailedError)
    - An opportunity category naming the mentor or resource collection → 400
    - No bearer token → the gateway signs in anonymously; failure → 401
    - Store unreachable → 503 (TransportError), never retried here
"""

from fastapi import APIRouter, Depends, status

from applixy.api.dependencies import get_gateway
from applixy.schemas.submission import (
    MentorSubmission, OpportunitySubmission, ResourceSubmission, SubmissionResponse,
)
from applixy.services.submission_gateway import SubmissionGateway

router = APIRouter(prefix="/api/v1/submissions", tags=["submissions"])


@router.post(
    "/opportunities", response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_opportunity(
    body: OpportunitySubmission,
    gateway: SubmissionGateway = Depends(get_gateway),
):
    collection = gateway.opportunity_target(body.category)
    document_id = await gateway.submit_opportunity(body.to_fields(), body.category)
    return SubmissionResponse(id=document_id, collection=collection)


@router.post(
    "/mentors", response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_mentor(
    body: MentorSubmission,
    gateway: SubmissionGateway = Depends(get_gateway),
):
    document_id = await gateway.submit_mentor(body.to_fields())
    return SubmissionResponse(id=document_id, collection=gateway.mentor_collection)


@router.post(
    "/resources", response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_resource(
    body: ResourceSubmission,
    gateway: SubmissionGateway = Depends(get_gateway),
):
    document_id = await gateway.submit_resource(body.to_fields())
    return SubmissionResponse(id=document_id, collection=gateway.resource_collection)
