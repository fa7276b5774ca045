"""Directory Service — one-shot reads for the Mentors and Resources screens.

Invariants:
    - Mentors are read from every configured mentor collection and merged by id
      (earlier collection wins)
    - Point reads of unknown documents raise ResourceNotFoundError
    - Store failures propagate as TransportError
"""

import logging

from applixy.core.domain_types import Collection, SERVER_TIMESTAMP_FIELD
from applixy.core.entities import Mentor, Opportunity, Resource
from applixy.core.errors import ErrorContext, ResourceNotFoundError
from applixy.core.field_mapper import map_mentor, map_opportunity, map_resource, map_scholarship
from applixy.core.repository_protocols import DocumentStore, Query
from applixy.services.snapshot_decoder import decode_snapshot

logger = logging.getLogger(__name__)


class DirectoryService:
    """Reads mentors, resources and single opportunities from the store."""

    def __init__(
        self,
        store: DocumentStore,
        mentor_collections: list[str] | None = None,
        resource_collection: str = Collection.RESOURCES.value,
        scholarship_collection: str = Collection.SCHOLARSHIP.value,
    ):
        self._store = store
        self._mentor_collections = mentor_collections or [
            Collection.MENTORS.value, Collection.MENTOR.value,
        ]
        self._resource_collection = resource_collection
        self._scholarship_collection = scholarship_collection

    @property
    def scholarship_collection(self) -> str:
        return self._scholarship_collection

    async def mentors(self) -> list[Mentor]:
        merged = []
        seen: set[str] = set()
        for collection in self._mentor_collections:
            snapshot = await self._store.fetch(
                Query(collection, SERVER_TIMESTAMP_FIELD, descending=True),
            )
            for document in snapshot:
                if document.id in seen:
                    continue
                seen.add(document.id)
                merged.append(document)
        return decode_snapshot(merged, map_mentor).entities

    async def resources(self) -> list[Resource]:
        snapshot = await self._store.fetch(Query(self._resource_collection))
        return decode_snapshot(snapshot, map_resource).entities

    def _opportunity_mapper(self, collection: str):
        if collection == self._scholarship_collection:
            return map_scholarship
        return map_opportunity

    async def opportunities(self, collection: str) -> list[Opportunity]:
        """One-shot fetch of an opportunity collection, newest first."""
        snapshot = await self._store.fetch(
            Query(collection, SERVER_TIMESTAMP_FIELD, descending=True),
        )
        return decode_snapshot(snapshot, self._opportunity_mapper(collection)).entities

    async def opportunity(self, collection: str, document_id: str) -> Opportunity:
        document = await self._store.get(collection, document_id)
        if document is None:
            raise ResourceNotFoundError(
                "Opportunity", document_id,
                ErrorContext(collection=collection, document_id=document_id),
            )
        return self._opportunity_mapper(collection)(document, None).entity
