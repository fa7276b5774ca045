"""Saved Routes — the Saved screen backed by the user's SavedRegistry.

Invariants:
    - Listing preserves save order
    - DELETE of an id that is not saved is a no-op (still 200, removed=false)
"""

from fastapi import APIRouter, Depends

from applixy.api.dependencies import get_feed_controller
from applixy.schemas.feed import OpportunityOut, SavedListResponse
from applixy.services.feed_controller import OpportunityFeedController

router = APIRouter(prefix="/api/v1/saved", tags=["saved"])


@router.get("", response_model=SavedListResponse)
async def list_saved(controller: OpportunityFeedController = Depends(get_feed_controller)):
    items = [OpportunityOut.from_entity(o) for o in controller.registry.items]
    return SavedListResponse(items=items, count=len(items))


@router.delete("/{opportunity_id}")
async def remove_saved(
    opportunity_id: str,
    controller: OpportunityFeedController = Depends(get_feed_controller),
):
    removed = controller.registry.remove(opportunity_id)
    return {"removed": removed, "count": len(controller.registry)}
