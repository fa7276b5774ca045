"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Documents are schema-less: typed decoding happens in core/field_mapper.py

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all/migrations
"""

from applixy.models.document import StoredDocument  # noqa: F401
from applixy.models.account import Account  # noqa: F401
