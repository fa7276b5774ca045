"""Feed Routes — the Discover screen: current card, swipe actions, live stream.

Invariants:
    - Every route needs a signed-in user (anonymous accounts included)
    - The first feed request opens the user's live subscription; DELETE
      /subscription closes it
    - Card actions return the resulting FeedResponse so clients never re-poll
    - /stream emits one SSE event per FeedState change until the client disconnects
    - The last /stream client to disconnect stops the background subscription

Design Decisions:
    - StreamingResponse for SSE with the same no-buffering headers as every stream
    - A save with an explicit id must name a card in the current list (404 otherwise)
"""

import logging
from contextlib import aclosing

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from applixy.api.dependencies import get_feed_controller
from applixy.api.routes.stream_helpers import SSE_HEADERS, sse_line
from applixy.core.errors import ResourceNotFoundError
from applixy.schemas.feed import FeedResponse, SaveRequest, SwipeRequest, SwipeResponse
from applixy.services.feed_controller import OpportunityFeedController

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/feed", tags=["feed"])


def _response(controller: OpportunityFeedController) -> FeedResponse:
    return FeedResponse.from_state(controller.state, controller.is_subscribed)


@router.get("", response_model=FeedResponse)
async def get_feed(
    wait_ms: int = Query(0, ge=0, le=10_000),
    controller: OpportunityFeedController = Depends(get_feed_controller),
):
    """Current card. wait_ms blocks until the first snapshot arrives (bounded)."""
    controller.start()
    if wait_ms:
        await controller.wait_for_snapshot(wait_ms / 1000)
    return _response(controller)


@router.post("/advance", response_model=FeedResponse)
async def advance(controller: OpportunityFeedController = Depends(get_feed_controller)):
    controller.advance()
    return _response(controller)


@router.post("/skip", response_model=FeedResponse)
async def skip(controller: OpportunityFeedController = Depends(get_feed_controller)):
    controller.skip()
    return _response(controller)


@router.post("/save", response_model=FeedResponse)
async def save(
    body: SaveRequest | None = None,
    controller: OpportunityFeedController = Depends(get_feed_controller),
):
    """Save the current card (or the named one), then advance."""
    target = None
    if body is not None and body.opportunity_id:
        target = next(
            (o for o in controller.state.items if o.id == body.opportunity_id),
            None,
        )
        if target is None:
            raise ResourceNotFoundError("Opportunity", body.opportunity_id)
    controller.save(target)
    return _response(controller)


@router.post("/swipe", response_model=SwipeResponse)
async def swipe(
    body: SwipeRequest,
    controller: OpportunityFeedController = Depends(get_feed_controller),
):
    action = controller.swipe(body.dx, body.dy)
    return SwipeResponse(action=action, feed=_response(controller))


@router.delete("/subscription", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_subscription(
    controller: OpportunityFeedController = Depends(get_feed_controller),
):
    """Discover screen left: stop receiving snapshots."""
    await controller.cancel()


@router.get("/stream")
async def stream_feed(controller: OpportunityFeedController = Depends(get_feed_controller)):
    """SSE stream of FeedResponse payloads, one per state change."""
    controller.start()

    async def event_generator():
        async with aclosing(controller.follow()) as states:
            async for state in states:
                if controller.error is not None:
                    yield sse_line(controller.error.to_sse_event())
                yield sse_line({
                    "type": "feed",
                    "data": FeedResponse.from_state(
                        state, controller.is_subscribed,
                    ).model_dump(mode="json"),
                })

    return StreamingResponse(
        event_generator(), media_type="text/event-stream", headers=SSE_HEADERS,
    )
