"""Submission Gateway — validates a form, ensures an identity, writes one document.

Invariants:
    - Validation runs before any IO (ValidationFailedError, no network call)
    - Each form is validated by its own rules, not by the collection it targets
    - No identity → one anonymous sign-in attempt; AuthRequiredError only if that fails
    - Every document carries a server-assigned creation timestamp
    - No retries: TransportError goes back to the caller
    - No cache update: open subscriptions on the same collection pick the write up

Design Decisions:
    - submit() returns the new document id or raises a typed ApplixyError
"""

import logging
from typing import Any

from applixy.core.domain_types import Collection, DocumentId, UserId
from applixy.core.errors import (
    AuthRequiredError, ErrorContext, TransportError, ValidationFailedError,
)
from applixy.core.repository_protocols import DocumentStore, IdentityProvider
from applixy.core.submission import (
    MENTOR_REQUIRED, OPPORTUNITY_REQUIRED, RESERVED_CATEGORIES, RESOURCE_REQUIRED,
    build_document, opportunity_collection,
)

logger = logging.getLogger(__name__)


class SubmissionGateway:
    """Packages new listings into documents and writes them to the store."""

    def __init__(
        self,
        store: DocumentStore,
        identity: IdentityProvider,
        scholarship_collection: str = Collection.SCHOLARSHIP.value,
        mentor_collection: str = Collection.MENTORS.value,
        resource_collection: str = Collection.RESOURCES.value,
    ):
        self._store = store
        self._identity = identity
        self.scholarship_collection = scholarship_collection
        self.mentor_collection = mentor_collection
        self.resource_collection = resource_collection

    async def _ensure_signed_in(self) -> UserId:
        if self._identity.current_user:
            return self._identity.current_user
        logger.info("No signed-in identity, attempting anonymous sign-in")
        try:
            return await self._identity.sign_in_anonymously()
        except TransportError as e:
            raise AuthRequiredError(
                "Sign-in failed", ErrorContext(debug_info={"cause": e.message}),
            ) from e

    def opportunity_target(self, category: str | None = None) -> str:
        """Collection an opportunity form writes to. Raises ValidationFailedError
        when the category names a mentor or resource collection."""
        reserved = RESERVED_CATEGORIES | {
            self.mentor_collection.lower(), self.resource_collection.lower(),
        }
        try:
            return opportunity_collection(category, self.scholarship_collection, reserved)
        except ValidationFailedError as e:
            logger.warning(
                f"Submission rejected: {e.message}",
                extra={"collection": category, "error_code": e.code},
            )
            raise

    async def submit(
        self,
        collection: str,
        fields: dict[str, Any],
        required: tuple[str, ...] | None = None,
    ) -> DocumentId:
        try:
            document = build_document(collection, fields, required)
        except ValidationFailedError as e:
            logger.warning(
                f"Submission rejected: {e.message}",
                extra={"collection": collection, "error_code": e.code},
            )
            raise
        user_id = await self._ensure_signed_in()
        try:
            document_id = await self._store.add(collection, document)
        except TransportError as e:
            e.context.collection = collection
            e.context.user_id = user_id
            logger.warning(
                f"Submission write failed: {e.message}",
                extra={"collection": collection, "user_id": user_id, "error_code": e.code},
            )
            raise
        logger.info(
            "Submission written",
            extra={"collection": collection, "document_id": document_id, "user_id": user_id},
        )
        return document_id

    async def submit_opportunity(
        self, fields: dict[str, Any], category: str | None = None,
    ) -> DocumentId:
        """Opportunities go to the scholarship collection unless a category is chosen.
        The opportunity rules apply whichever collection that is."""
        return await self.submit(
            self.opportunity_target(category), fields, OPPORTUNITY_REQUIRED,
        )

    async def submit_mentor(self, fields: dict[str, Any]) -> DocumentId:
        return await self.submit(self.mentor_collection, fields, MENTOR_REQUIRED)

    async def submit_resource(self, fields: dict[str, Any]) -> DocumentId:
        return await self.submit(self.resource_collection, fields, RESOURCE_REQUIRED)
