"""Account ORM — identities that may write to the store.

Invariants:
    - id is the stable user identifier handed to clients
    - Anonymous accounts have no email and no password_hash
    - email is unique (case-folded before insert)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from applixy.db.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=lambda: uuid.uuid4().hex,
    )
    email: Mapped[str | None] = mapped_column(
        String(320), nullable=True, unique=True,
    )
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
