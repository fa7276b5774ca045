"""API Dependencies — wires store, identity, gateway and per-user feed controllers.

Invariants:
    - One SqlDocumentStore per process (shared wakeups across subscriptions)
    - One OpportunityFeedController per signed-in user, held in memory
    - Controllers idle past feed_idle_timeout_seconds (no request, no stream)
      are cancelled and dropped by the sweep
    - Routes never construct infrastructure themselves: everything comes from Depends

Design Decisions:
    - _feed_controllers as module-level dict: single-process uvicorn, feed
      position and saved items are lost on restart
"""

import asyncio
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from applixy.api.auth_tokens import decode_token
from applixy.config import Settings, get_settings
from applixy.core.domain_types import UserId
from applixy.core.errors import AuthRequiredError
from applixy.core.repository_protocols import DocumentStore, Query
from applixy.infrastructure.database import DatabaseSessionManager, get_db_manager
from applixy.infrastructure.document_store import SqlDocumentStore
from applixy.infrastructure.identity import AccountDirectory, SessionIdentity
from applixy.services.directory_service import DirectoryService
from applixy.services.feed_controller import OpportunityFeedController
from applixy.services.submission_gateway import SubmissionGateway

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_store: SqlDocumentStore | None = None
_feed_controllers: dict[UserId, OpportunityFeedController] = {}


def get_store(
    manager: DatabaseSessionManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> DocumentStore:
    global _store
    if _store is None:
        _store = SqlDocumentStore(manager, settings.snapshot_poll_interval_seconds)
    return _store


def get_account_directory(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> AccountDirectory:
    return AccountDirectory(manager)


def optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> UserId | None:
    if credentials is None:
        return None
    return decode_token(credentials.credentials, settings)


def require_user(user_id: UserId | None = Depends(optional_user)) -> UserId:
    if user_id is None:
        raise AuthRequiredError()
    return user_id


def get_identity(
    user_id: UserId | None = Depends(optional_user),
    accounts: AccountDirectory = Depends(get_account_directory),
    settings: Settings = Depends(get_settings),
) -> SessionIdentity:
    return SessionIdentity(accounts, user_id, settings.allow_anonymous_sign_in)


def get_directory(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> DirectoryService:
    return DirectoryService(
        store,
        mentor_collections=settings.mentor_collections,
        resource_collection=settings.resource_collection,
        scholarship_collection=settings.scholarship_collection,
    )


def get_gateway(
    store: DocumentStore = Depends(get_store),
    identity: SessionIdentity = Depends(get_identity),
    settings: Settings = Depends(get_settings),
) -> SubmissionGateway:
    return SubmissionGateway(
        store,
        identity,
        scholarship_collection=settings.scholarship_collection,
        mentor_collection=settings.mentor_collections[0],
        resource_collection=settings.resource_collection,
    )


def get_feed_controller(
    user_id: UserId = Depends(require_user),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> OpportunityFeedController:
    controller = _feed_controllers.get(user_id)
    if controller is None:
        controller = OpportunityFeedController(
            store,
            query=Query(
                settings.scholarship_collection,
                settings.feed_order_field,
                settings.feed_order_descending,
            ),
        )
        _feed_controllers[user_id] = controller
        logger.info("Feed controller created", extra={"user_id": user_id})
    controller.touch()
    return controller


async def evict_idle_feed_controllers(max_idle: float, now: float | None = None) -> int:
    """Cancel and drop controllers with no request or stream for max_idle seconds.

    Saved items held by an evicted controller go with it.
    """
    idle = [
        user_id for user_id, controller in _feed_controllers.items()
        if controller.idle_for(now) >= max_idle
    ]
    for user_id in idle:
        controller = _feed_controllers.pop(user_id)
        await controller.cancel()
    if idle:
        logger.info(
            "Idle feed controllers evicted",
            extra={"evicted": len(idle), "remaining": len(_feed_controllers)},
        )
    return len(idle)


async def sweep_feed_controllers(interval: float, max_idle: float) -> None:
    """Run evict_idle_feed_controllers every interval seconds (until cancelled)."""
    while True:
        await asyncio.sleep(interval)
        await evict_idle_feed_controllers(max_idle)


async def close_feed_controllers() -> None:
    """Cancel every open subscription (shutdown)."""
    for controller in list(_feed_controllers.values()):
        await controller.cancel()
    _feed_controllers.clear()
