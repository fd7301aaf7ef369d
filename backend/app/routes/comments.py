"""
Abacus Backend — Comment Route Handlers
=========================================

What:  CRUD endpoints for the comment resource.
Why:   Thin HTTP layer over CommentService.
How:   Path ids and bodies are handed to the service untouched; the store
       decides what is valid. Errors raised by the service are turned into
       JSON by the global exception handlers.

Route Inventory (mounted under settings.comments_prefix, default /api/comments):
    GET    /{comment_id}   200 record | 404 | 500
    POST   (prefix root)   201 record | 400
    PUT    /{comment_id}   200 record | 404 | 400
    DELETE /{comment_id}   200 message | 404 | 500
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.comment import CommentDeletedResponse, CommentRecord
from app.schemas.common import ErrorResponse
from app.services.comment_service import comment_service

logger = logging.getLogger(__name__)

# Prefix is applied in main.create_app() from settings
router = APIRouter(tags=["Comments"])

_NOT_FOUND = {"description": "Comment not found", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Bad request", "model": ErrorResponse}
_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}


@router.get(
    "/{comment_id}",
    responses={
        200: {"description": "The comment", "model": CommentRecord},
        404: _NOT_FOUND,
        500: _SERVER_ERROR,
    },
    summary="Get a comment by ID",
)
async def get_comment(
    comment_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    """
    Args:
        comment_id: UUID string. Anything that does not parse is a store
                    failure (500), not a 404 or 422.
    """
    return await comment_service.get_comment(db=db, comment_id=comment_id)


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Comment created", "model": CommentRecord},
        400: _BAD_REQUEST,
    },
    summary="Create a comment",
)
async def create_comment(
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    return await comment_service.create_comment(db=db, payload=payload)


@router.put(
    "/{comment_id}",
    responses={
        200: {"description": "Updated comment", "model": CommentRecord},
        400: _BAD_REQUEST,
        404: _NOT_FOUND,
    },
    summary="Update a comment by ID",
    description="Supplied fields replace stored ones; fields not supplied are kept.",
)
async def update_comment(
    comment_id: str,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    return await comment_service.update_comment(db=db, comment_id=comment_id, payload=payload)


@router.delete(
    "/{comment_id}",
    response_model=CommentDeletedResponse,
    responses={
        404: _NOT_FOUND,
        500: _SERVER_ERROR,
    },
    summary="Delete a comment by ID",
)
async def delete_comment(
    comment_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> CommentDeletedResponse:
    await comment_service.delete_comment(db=db, comment_id=comment_id)
    return CommentDeletedResponse()
