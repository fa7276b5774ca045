"""Document ORM — one schema-less record in a named collection.

Invariants:
    - id is a store-assigned string, never reassigned
    - data holds the payload as-is (JSON); server timestamps are serialized ISO strings
    - created_at is the store's clock at write time (orders the feed)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from applixy.db.base import Base


def new_document_id() -> str:
    return uuid.uuid4().hex


class StoredDocument(Base):
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_collection_created_at", "collection", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=new_document_id,
    )
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
