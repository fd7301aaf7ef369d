"""
Abacus Backend — Comment SQLAlchemy Model
===========================================

What:  ORM model representing the `comments` table.
Why:   The comment resource is a document store: each row holds one
       schemaless JSON document keyed by a store-generated UUID.
How:   Inherits from the declarative Base; Alembic revision 001 creates it.
Who:   Used by CommentStore for every read and write.

Table Design Rationale:
    - UUID primary key: generated by the store on insert, never by the caller
    - document: caller-supplied fields (JSONB on PostgreSQL, JSON elsewhere)
    - created_at / updated_at: store-managed timestamps, UTC
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Keys the store owns; callers cannot write them through the document
RESERVED_KEYS = frozenset({"id", "created_at", "updated_at"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Comment(Base):
    """
    A single comment document.

    Lifecycle:
        1. Inserted on create with a fresh UUID and both timestamps set
        2. Updated in place: supplied fields are merged into `document`
        3. Removed on delete; there is no soft-delete
    """

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-generated comment identifier",
    )

    # Reassign (never mutate in place) so the ORM notices the change
    document: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
        comment="Caller-supplied comment fields",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        comment="When this comment was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        comment="When this comment was last written (UTC)",
    )

    __table_args__ = (
        Index("idx_comments_created_at", created_at.desc()),
    )

    def to_record(self) -> Dict[str, Any]:
        """Flatten the row into the JSON record returned by the API."""
        record: Dict[str, Any] = {"id": str(self.id)}
        record.update(self.document)
        record["created_at"] = _as_utc(self.created_at).isoformat()
        record["updated_at"] = _as_utc(self.updated_at).isoformat()
        return record

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, created_at='{self.created_at}')>"
