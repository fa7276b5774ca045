"""Snapshot Decoder — maps every document of a snapshot, absorbing bad records.

Invariants:
    - One malformed document never aborts the snapshot: MappingSkipped → skipped list
    - Defaulted fields are logged at DEBUG and kept per document id
    - Output order == snapshot order
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Generic, TypeVar

from applixy.core.entities import Snapshot
from applixy.core.errors import MappingSkipped
from applixy.core.field_mapper import Mapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class DecodedSnapshot(Generic[T]):
    entities: list[T] = field(default_factory=list)
    defaulted: dict[str, tuple[str, ...]] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


def decode_snapshot(
    snapshot: Snapshot, mapper: Mapper, today: date | None = None,
) -> DecodedSnapshot:
    decoded: DecodedSnapshot = DecodedSnapshot()
    for document in snapshot:
        try:
            result = mapper(document, today)
        except MappingSkipped as e:
            logger.warning(
                f"Skipping document: {e.reason}",
                extra={"collection": document.collection, "document_id": document.id},
            )
            decoded.skipped.append(document.id)
            continue
        if result.defaulted:
            decoded.defaulted[document.id] = result.defaulted
            logger.debug(
                "Mapping defaulted",
                extra={
                    "collection": document.collection,
                    "document_id": document.id,
                    "defaulted_fields": list(result.defaulted),
                },
            )
        decoded.entities.append(result.entity)
    return decoded
