from typing import Optional

from todo_api.logging_config import get_logger
from todo_api.repositories.codec import with_defaults
from todo_api.repositories.keys import Identifier, parse_identifier
from todo_api.repositories.todo_repository import TodoRepository
from todo_api.schemas.todo import TodoCreate, TodoItem, TodoPage, TodoUpdate

logger = get_logger(__name__)


class TodoService:
    def __init__(self, repo: TodoRepository) -> None:
        self._repo = repo

    async def create_todo(self, payload: TodoCreate) -> TodoItem:
        todo = with_defaults(payload)
        await self._repo.put(todo)
        logger.info(
            "todo_created",
            owner_id=str(todo.owner_id),
            item_id=str(todo.item_id),
        )
        return todo

    async def get_todo(
        self, owner_id: Identifier, item_id: Identifier
    ) -> Optional[TodoItem]:
        owner = parse_identifier(owner_id, "owner_id")
        item = parse_identifier(item_id, "item_id")
        todo = await self._repo.get(owner, item)
        if todo is None:
            logger.info("todo_not_found", owner_id=str(owner), item_id=str(item))
        return todo

    async def update_todo(
        self, owner_id: Identifier, item_id: Identifier, payload: TodoUpdate
    ) -> TodoItem:
        owner = parse_identifier(owner_id, "owner_id")
        item = parse_identifier(item_id, "item_id")
        changes = payload.changes()
        todo = await self._repo.update(owner, item, changes)
        logger.info(
            "todo_updated",
            owner_id=str(owner),
            item_id=str(item),
            fields=sorted(changes),
        )
        return todo

    async def delete_todo(self, owner_id: Identifier, item_id: Identifier) -> None:
        owner = parse_identifier(owner_id, "owner_id")
        item = parse_identifier(item_id, "item_id")
        await self._repo.delete(owner, item)
        logger.info("todo_deleted", owner_id=str(owner), item_id=str(item))

    async def list_todos(
        self,
        owner_id: Identifier,
        after: Optional[Identifier] = None,
        limit: Optional[int] = None,
    ) -> TodoPage:
        owner = parse_identifier(owner_id, "owner_id")
        after_item = parse_identifier(after, "after") if after is not None else None
        page = await self._repo.list_by_owner(owner, after_item, limit)
        logger.info(
            "todos_listed",
            owner_id=str(owner),
            count=len(page.items),
            has_more=page.page_token is not None,
        )
        return page
