import uuid
from unittest.mock import AsyncMock

import pytest

from todo_api.exceptions.todo_exceptions import InvalidIdentifier, StoreUnavailable
from todo_api.schemas.todo import TodoCreate, TodoItem, TodoPage, TodoUpdate
from todo_api.services.todo_service import TodoService
from tests.conftest import OWNER_ID

ITEM_ID = str(uuid.uuid4())


@pytest.fixture
def mock_repo():
    repo = AsyncMock()
    repo.put = AsyncMock(side_effect=lambda todo: todo)
    repo.get = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=None)
    repo.list_by_owner = AsyncMock(return_value=TodoPage())
    return repo


@pytest.fixture
def service(mock_repo):
    return TodoService(repo=mock_repo)


class TestCreate:
    async def test_returns_item_with_defaults(self, service, mock_repo):
        todo = await service.create_todo(TodoCreate(owner_id=OWNER_ID))
        assert todo.title == ""
        assert todo.completed is False
        mock_repo.put.assert_awaited_once_with(todo)

    async def test_store_failure_propagates(self, service, mock_repo):
        mock_repo.put.side_effect = StoreUnavailable("put_item failed: Throttling")
        with pytest.raises(StoreUnavailable):
            await service.create_todo(TodoCreate(owner_id=OWNER_ID))


class TestIdentifiers:
    async def test_invalid_body_owner_never_reaches_store(self, service, mock_repo):
        with pytest.raises(InvalidIdentifier, match="owner_id"):
            await service.create_todo(TodoCreate(owner_id="u1"))
        mock_repo.put.assert_not_awaited()

    async def test_invalid_owner_never_reaches_store(self, service, mock_repo):
        with pytest.raises(InvalidIdentifier):
            await service.get_todo("u1", ITEM_ID)
        mock_repo.get.assert_not_awaited()

    async def test_invalid_item_on_delete(self, service, mock_repo):
        with pytest.raises(InvalidIdentifier):
            await service.delete_todo(OWNER_ID, "t1")
        mock_repo.delete.assert_not_awaited()

    async def test_invalid_cursor_on_list(self, service, mock_repo):
        with pytest.raises(InvalidIdentifier, match="after"):
            await service.list_todos(OWNER_ID, after="page-2")


class TestReadAndMutate:
    async def test_get_missing_returns_none(self, service):
        assert await service.get_todo(OWNER_ID, ITEM_ID) is None

    async def test_update_passes_only_set_fields(self, service, mock_repo):
        mock_repo.update = AsyncMock(
            return_value=TodoItem(
                owner_id=OWNER_ID, item_id=ITEM_ID, title="x", completed=True
            )
        )
        await service.update_todo(OWNER_ID, ITEM_ID, TodoUpdate(completed=True))
        mock_repo.update.assert_awaited_once_with(
            uuid.UUID(OWNER_ID), uuid.UUID(ITEM_ID), {"completed": True}
        )

    async def test_update_ignores_identity_in_body(self, service, mock_repo):
        mock_repo.update = AsyncMock(
            return_value=TodoItem(
                owner_id=OWNER_ID, item_id=ITEM_ID, title="x", completed=False
            )
        )
        payload = TodoUpdate.model_validate(
            {"owner_id": str(uuid.uuid4()), "item_id": str(uuid.uuid4()), "title": "x"}
        )
        await service.update_todo(OWNER_ID, ITEM_ID, payload)
        mock_repo.update.assert_awaited_once_with(
            uuid.UUID(OWNER_ID), uuid.UUID(ITEM_ID), {"title": "x"}
        )

    async def test_delete_twice_succeeds(self, service, mock_repo):
        await service.delete_todo(OWNER_ID, ITEM_ID)
        await service.delete_todo(OWNER_ID, ITEM_ID)
        assert mock_repo.delete.await_count == 2

    async def test_list_forwards_cursor_and_limit(self, service, mock_repo):
        after = str(uuid.uuid4())
        await service.list_todos(OWNER_ID, after=after, limit=5)
        mock_repo.list_by_owner.assert_awaited_once_with(
            uuid.UUID(OWNER_ID), uuid.UUID(after), 5
        )
