"""
Abacus Backend — Comment Schemas
==================================

What:  The document schema the comment store enforces, plus response shapes.
Why:   The route layer passes request bodies through untouched; the store is
       the only place a comment payload is judged, exactly like a document
       database model would judge it.
How:   CommentDocument allows extra fields so caller data survives verbatim;
       only `body` (required) and `author` (optional) are typed.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CommentDocument(BaseModel):
    """
    What:  Shape of a stored comment document.
    Who:   Validated by CommentStore on insert and on every update (after merge).

    Rejections here surface to the client as 400 "Bad request".
    """
    body: str = Field(min_length=1, description="Comment text")
    author: Optional[str] = Field(default=None, description="Free-form author reference")

    model_config = {"extra": "allow"}


class CommentRecord(BaseModel):
    """
    What:  Serialized comment as returned by the API (documentation only).
    Why:   Records are returned as plain JSON so extra caller fields pass
           through; this model feeds the OpenAPI schema.
    """
    id: str = Field(description="Store-generated identifier (UUID)")
    body: str = Field(description="Comment text")
    author: Optional[str] = Field(default=None, description="Author reference, if supplied")
    created_at: str = Field(description="Creation timestamp (UTC ISO 8601)")
    updated_at: str = Field(description="Last write timestamp (UTC ISO 8601)")

    model_config = {"extra": "allow"}


class CommentDeletedResponse(BaseModel):
    """Returned by DELETE /api/comments/{id} on success."""
    message: str = Field(
        default="Comment deleted successfully",
        description="Human-readable confirmation",
    )
