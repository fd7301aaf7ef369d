"""
Abacus Backend — Comment Store
================================

What:  Document-store access for comments: find, insert, merge-update, delete.
Why:   Callers need to tell "not there" from "rejected" from "broken" without
       catching driver exceptions themselves.
How:   Every call returns a StoreResult tagged with a StoreOutcome. Expected
       failures never raise; the service layer maps tags to HTTP errors.
Who:   Constructed per request by CommentService around the request session.

Outcome Classification:
    FOUND             the call succeeded; `record` holds the serialized comment
                      (for delete, the record that was removed)
    NOT_FOUND         no comment has that identifier
    VALIDATION_ERROR  the payload does not satisfy CommentDocument
    INFRA_ERROR       malformed identifier, driver or connectivity failure

Each operation issues at most one logical store round-trip and never retries.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.comment import RESERVED_KEYS, Comment
from app.schemas.comment import CommentDocument

logger = logging.getLogger(__name__)

# Failures the store reports as INFRA_ERROR instead of raising
_INFRA_ERRORS = (SQLAlchemyError, OSError)


class StoreOutcome(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    INFRA_ERROR = "infra_error"


@dataclass(frozen=True)
class StoreResult:
    """Tagged result of one store call."""

    outcome: StoreOutcome
    record: Optional[Dict[str, Any]] = None
    detail: Optional[str] = None

    @classmethod
    def found(cls, record: Dict[str, Any]) -> "StoreResult":
        return cls(StoreOutcome.FOUND, record=record)

    @classmethod
    def not_found(cls) -> "StoreResult":
        return cls(StoreOutcome.NOT_FOUND)

    @classmethod
    def validation_error(cls, detail: str) -> "StoreResult":
        return cls(StoreOutcome.VALIDATION_ERROR, detail=detail)

    @classmethod
    def infra_error(cls, detail: str) -> "StoreResult":
        return cls(StoreOutcome.INFRA_ERROR, detail=detail)

    @property
    def ok(self) -> bool:
        return self.outcome is StoreOutcome.FOUND


def parse_comment_id(raw_id: str) -> uuid.UUID:
    """Parse a store identifier; raises ValueError when it is not a UUID."""
    return uuid.UUID(str(raw_id))


def validate_document(payload: Any) -> Dict[str, Any]:
    """
    Apply the comment schema to a payload.

    Store-managed keys are dropped before validation. Fields the caller did
    not send are not materialized, so a stored document holds exactly the
    caller's fields.

    Raises:
        pydantic.ValidationError: payload is not an object or breaks the schema
    """
    if isinstance(payload, dict):
        payload = {k: v for k, v in payload.items() if k not in RESERVED_KEYS}
    return CommentDocument.model_validate(payload).model_dump(exclude_unset=True)


class CommentStore:
    """Comment persistence over one AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, raw_id: str):
        """Returns (comment_or_None, error_result_or_None)."""
        try:
            comment_id = parse_comment_id(raw_id)
        except ValueError:
            return None, StoreResult.infra_error(f"malformed identifier {raw_id!r}")
        try:
            comment = await self.session.get(Comment, comment_id)
        except _INFRA_ERRORS as e:
            logger.debug("Comment lookup %s failed: %s", raw_id, e)
            return None, StoreResult.infra_error(f"{type(e).__name__}: {e}")
        if comment is None:
            return None, StoreResult.not_found()
        return comment, None

    async def _commit(self) -> Optional[StoreResult]:
        try:
            await self.session.commit()
        except _INFRA_ERRORS as e:
            await self.session.rollback()
            logger.debug("Comment commit failed: %s", e)
            return StoreResult.infra_error(f"{type(e).__name__}: {e}")
        return None

    async def find_by_id(self, raw_id: str) -> StoreResult:
        comment, error = await self._load(raw_id)
        if error is not None:
            return error
        return StoreResult.found(comment.to_record())

    async def insert(self, payload: Any) -> StoreResult:
        try:
            document = validate_document(payload)
        except PydanticValidationError as e:
            return StoreResult.validation_error(str(e))

        comment = Comment(document=document)
        self.session.add(comment)
        error = await self._commit()
        if error is not None:
            return error

        logger.info("Comment created: %s", comment.id)
        return StoreResult.found(comment.to_record())

    async def update_by_id(self, raw_id: str, payload: Any) -> StoreResult:
        """
        Merge `payload` into the stored document and persist it.

        Fields absent from the payload keep their stored values. The merged
        document is validated as a whole, so an update may not remove `body`
        (e.g. by sending `"body": null`).
        """
        if not isinstance(payload, dict):
            return StoreResult.validation_error("update payload must be a JSON object")

        comment, error = await self._load(raw_id)
        if error is not None:
            return error

        try:
            document = validate_document({**comment.document, **payload})
        except PydanticValidationError as e:
            return StoreResult.validation_error(str(e))

        comment.document = document
        comment.updated_at = datetime.now(timezone.utc)
        error = await self._commit()
        if error is not None:
            return error

        logger.info("Comment updated: %s", comment.id)
        return StoreResult.found(comment.to_record())

    async def delete_by_id(self, raw_id: str) -> StoreResult:
        comment, error = await self._load(raw_id)
        if error is not None:
            return error

        record = comment.to_record()
        try:
            await self.session.delete(comment)
        except _INFRA_ERRORS as e:
            return StoreResult.infra_error(f"{type(e).__name__}: {e}")
        error = await self._commit()
        if error is not None:
            return error

        logger.info("Comment deleted: %s", record["id"])
        return StoreResult.found(record)
