"""Directory Routes — Mentors and Resources screens plus opportunity details.

Invariants:
    - Reads are open: no sign-in needed to browse
    - Unknown opportunity id → 404 (ResourceNotFoundError)
"""

from fastapi import APIRouter, Depends, Query

from applixy.api.dependencies import get_directory
from applixy.schemas.directory import MentorOut, ResourceOut
from applixy.schemas.feed import OpportunityOut
from applixy.services.directory_service import DirectoryService

router = APIRouter(prefix="/api/v1", tags=["directory"])


@router.get("/mentors", response_model=list[MentorOut])
async def list_mentors(directory: DirectoryService = Depends(get_directory)):
    return [MentorOut.from_entity(m) for m in await directory.mentors()]


@router.get("/resources", response_model=list[ResourceOut])
async def list_resources(directory: DirectoryService = Depends(get_directory)):
    return [ResourceOut.from_entity(r) for r in await directory.resources()]


@router.get("/opportunities", response_model=list[OpportunityOut])
async def list_opportunities(
    collection: str | None = Query(None, max_length=100, pattern=r"^[A-Za-z0-9_\-]+$"),
    directory: DirectoryService = Depends(get_directory),
):
    """One-shot list of a collection (default: scholarships), newest first."""
    items = await directory.opportunities(collection or directory.scholarship_collection)
    return [OpportunityOut.from_entity(o) for o in items]


@router.get("/opportunities/{document_id}", response_model=OpportunityOut)
async def get_opportunity(
    document_id: str,
    collection: str | None = Query(None, max_length=100, pattern=r"^[A-Za-z0-9_\-]+$"),
    directory: DirectoryService = Depends(get_directory),
):
    """Detail view (swipe up)."""
    opportunity = await directory.opportunity(
        collection or directory.scholarship_collection, document_id,
    )
    return OpportunityOut.from_entity(opportunity)
