"""
Abacus Backend — Comment Service
==================================

What:  Translates comment store outcomes into application exceptions.
Why:   The same store outcome means different things per operation: a store
       failure is a 500 on fetch/delete but a 400 on create/update.
How:   Each method runs one CommentStore call and classifies its StoreResult.
Who:   Called by the comment route handlers.

Status Mapping:
    ┌─────────────┬──────────┬───────────┬──────────────────┬─────────────┐
    │ Operation   │ FOUND    │ NOT_FOUND │ VALIDATION_ERROR │ INFRA_ERROR │
    ├─────────────┼──────────┼───────────┼──────────────────┼─────────────┤
    │ fetch       │ 200      │ 404       │ 500              │ 500         │
    │ create      │ 201      │ 400       │ 400              │ 400         │
    │ update      │ 200      │ 404       │ 400              │ 400         │
    │ delete      │ 200      │ 404       │ 500              │ 500 (logged)│
    └─────────────┴──────────┴───────────┴──────────────────┴─────────────┘
"""

import logging
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BadRequestError, DatabaseError, NotFoundError
from app.services.comment_store import CommentStore, StoreOutcome, StoreResult

logger = logging.getLogger(__name__)

RESOURCE = "comment"


class CommentService:
    """
    Business logic layer for comment operations.

    Stateless: the store is built around the session passed to each call.
    """

    def _store(self, db: AsyncSession) -> CommentStore:
        return CommentStore(db)

    @staticmethod
    def _raise_not_found(comment_id: str, result: StoreResult) -> None:
        if result.outcome is StoreOutcome.NOT_FOUND:
            raise NotFoundError(resource=RESOURCE, resource_id=comment_id)

    async def get_comment(self, db: AsyncSession, comment_id: str) -> Dict[str, Any]:
        """
        Raises:
            NotFoundError: no comment with this id (→ 404)
            DatabaseError: malformed id or store failure (→ 500)
        """
        result = await self._store(db).find_by_id(comment_id)
        if result.ok:
            return result.record
        self._raise_not_found(comment_id, result)
        raise DatabaseError(
            context={"operation": "fetch", "comment_id": comment_id, "detail": result.detail},
        )

    async def create_comment(self, db: AsyncSession, payload: Any) -> Dict[str, Any]:
        """
        Raises:
            BadRequestError: store rejected or failed to persist the payload (→ 400)
        """
        result = await self._store(db).insert(payload)
        if result.ok:
            return result.record
        logger.info("Comment create rejected (%s): %s", result.outcome.value, result.detail)
        raise BadRequestError(
            context={"operation": "create", "outcome": result.outcome.value, "detail": result.detail},
        )

    async def update_comment(
        self, db: AsyncSession, comment_id: str, payload: Any
    ) -> Dict[str, Any]:
        """
        Raises:
            NotFoundError: no comment with this id (→ 404)
            BadRequestError: merged document invalid, malformed id or store failure (→ 400)
        """
        result = await self._store(db).update_by_id(comment_id, payload)
        if result.ok:
            return result.record
        self._raise_not_found(comment_id, result)
        logger.info(
            "Comment update %s rejected (%s): %s",
            comment_id, result.outcome.value, result.detail,
        )
        raise BadRequestError(
            context={
                "operation": "update",
                "comment_id": comment_id,
                "outcome": result.outcome.value,
                "detail": result.detail,
            },
        )

    async def delete_comment(self, db: AsyncSession, comment_id: str) -> None:
        """
        Raises:
            NotFoundError: no comment with this id (→ 404)
            DatabaseError: malformed id or store failure (→ 500), logged here
        """
        result = await self._store(db).delete_by_id(comment_id)
        if result.ok:
            return
        self._raise_not_found(comment_id, result)
        logger.error("Failed to delete comment %s: %s", comment_id, result.detail)
        raise DatabaseError(
            context={"operation": "delete", "comment_id": comment_id, "detail": result.detail},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
comment_service = CommentService()
