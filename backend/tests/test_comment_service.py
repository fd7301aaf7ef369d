"""
Abacus Backend — Comment Service Unit Tests
=============================================

What:  Tests for the StoreResult → exception mapping of CommentService.
How:   CommentStore is patched with an AsyncMock; no database involved.

What we test:
    ✅ FOUND returns the record for every operation
    ✅ NOT_FOUND raises NotFoundError ("Comment not found")
    ✅ Store failures: DatabaseError on fetch/delete, BadRequestError on create/update
    ✅ Delete failures are logged at ERROR
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from app.exceptions import BadRequestError, DatabaseError, NotFoundError
from app.services.comment_service import CommentService
from app.services.comment_store import StoreResult

RECORD = {"id": str(uuid4()), "body": "hello", "created_at": "x", "updated_at": "x"}


def _store_returning(method: str, result: StoreResult) -> MagicMock:
    store = MagicMock()
    setattr(store, method, AsyncMock(return_value=result))
    return store


class TestCommentServiceFetch:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_found(self, mock_db_session):
        store = _store_returning("find_by_id", StoreResult.found(RECORD))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            result = await self.service.get_comment(mock_db_session, RECORD["id"])
        assert result == RECORD
        store.find_by_id.assert_awaited_once_with(RECORD["id"])

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        store = _store_returning("find_by_id", StoreResult.not_found())
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with pytest.raises(NotFoundError) as exc_info:
                await self.service.get_comment(mock_db_session, "abc")
        assert exc_info.value.message == "Comment not found"

    @pytest.mark.asyncio
    async def test_infra_error_is_server_error(self, mock_db_session):
        store = _store_returning("find_by_id", StoreResult.infra_error("down"))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with pytest.raises(DatabaseError) as exc_info:
                await self.service.get_comment(mock_db_session, "abc")
        assert exc_info.value.message == "Server error"
        assert exc_info.value.context["detail"] == "down"


class TestCommentServiceCreate:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_created(self, mock_db_session):
        store = _store_returning("insert", StoreResult.found(RECORD))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            assert await self.service.create_comment(mock_db_session, {"body": "hello"}) == RECORD

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "result",
        [StoreResult.validation_error("body missing"), StoreResult.infra_error("down")],
    )
    async def test_any_failure_is_bad_request(self, mock_db_session, result):
        store = _store_returning("insert", result)
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with pytest.raises(BadRequestError) as exc_info:
                await self.service.create_comment(mock_db_session, {})
        assert exc_info.value.message == "Bad request"
        assert exc_info.value.context["outcome"] == result.outcome.value


class TestCommentServiceUpdate:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_updated(self, mock_db_session):
        store = _store_returning("update_by_id", StoreResult.found(RECORD))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            result = await self.service.update_comment(mock_db_session, RECORD["id"], {"body": "x"})
        assert result == RECORD
        store.update_by_id.assert_awaited_once_with(RECORD["id"], {"body": "x"})

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        store = _store_returning("update_by_id", StoreResult.not_found())
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with pytest.raises(NotFoundError):
                await self.service.update_comment(mock_db_session, "abc", {"body": "x"})

    @pytest.mark.asyncio
    async def test_infra_error_is_bad_request(self, mock_db_session):
        store = _store_returning("update_by_id", StoreResult.infra_error("malformed identifier"))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with pytest.raises(BadRequestError):
                await self.service.update_comment(mock_db_session, "abc", {"body": "x"})


class TestCommentServiceDelete:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_deleted(self, mock_db_session):
        store = _store_returning("delete_by_id", StoreResult.found(RECORD))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            assert await self.service.delete_comment(mock_db_session, RECORD["id"]) is None

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db_session):
        store = _store_returning("delete_by_id", StoreResult.not_found())
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with pytest.raises(NotFoundError):
                await self.service.delete_comment(mock_db_session, "abc")

    @pytest.mark.asyncio
    async def test_failure_is_logged_server_error(self, mock_db_session, caplog):
        store = _store_returning("delete_by_id", StoreResult.infra_error("disk full"))
        with patch("app.services.comment_service.CommentStore", return_value=store):
            with caplog.at_level(logging.ERROR, logger="app.services.comment_service"):
                with pytest.raises(DatabaseError):
                    await self.service.delete_comment(mock_db_session, "abc")
        assert "disk full" in caplog.text
