"""Mapping between API todo models and DynamoDB AttributeValue maps."""

from typing import Union
from uuid import UUID

from todo_api.exceptions.todo_exceptions import MalformedStoreItem
from todo_api.ids import new_item_id
from todo_api.repositories.keys import TODO_ID_COLUMN, USER_ID_COLUMN, parse_identifier
from todo_api.schemas.todo import TodoCreate, TodoItem

TITLE_COLUMN = "title"
COMPLETED_COLUMN = "completed"

DEFAULT_TITLE = ""
DEFAULT_COMPLETED = False


def with_defaults(draft: TodoCreate) -> TodoItem:
    """Fill server-assigned fields on caller input. Raises InvalidIdentifier."""
    return TodoItem(
        owner_id=parse_identifier(draft.owner_id, "owner_id"),
        item_id=(
            parse_identifier(draft.item_id, "item_id")
            if draft.item_id is not None
            else new_item_id()
        ),
        title=draft.title if draft.title is not None else DEFAULT_TITLE,
        completed=draft.completed if draft.completed is not None else DEFAULT_COMPLETED,
    )


def encode(todo: Union[TodoCreate, TodoItem]) -> dict:
    if isinstance(todo, TodoCreate):
        todo = with_defaults(todo)
    return {
        USER_ID_COLUMN: {"S": str(todo.owner_id)},
        TODO_ID_COLUMN: {"S": str(todo.item_id)},
        TITLE_COLUMN: {"S": todo.title},
        COMPLETED_COLUMN: {"BOOL": todo.completed},
    }


def _attribute(item: dict, name: str, type_key: str):
    attr = item.get(name)
    if not isinstance(attr, dict) or type_key not in attr:
        raise MalformedStoreItem(
            f"store item attribute '{name}' is missing or not of type {type_key}"
        )
    return attr[type_key]


def _uuid_attribute(item: dict, name: str) -> UUID:
    raw = _attribute(item, name, "S")
    try:
        return UUID(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedStoreItem(
            f"store item attribute '{name}' is not a valid identifier: {raw!r}"
        ) from exc


def decode(item: dict) -> TodoItem:
    """Decode a persisted item. Missing or mistyped fields are never defaulted."""
    if not isinstance(item, dict):
        raise MalformedStoreItem("store item is not a map")

    title = _attribute(item, TITLE_COLUMN, "S")
    completed = _attribute(item, COMPLETED_COLUMN, "BOOL")
    if not isinstance(title, str) or not isinstance(completed, bool):
        raise MalformedStoreItem("store item has a mistyped title or completed value")

    return TodoItem(
        owner_id=_uuid_attribute(item, USER_ID_COLUMN),
        item_id=_uuid_attribute(item, TODO_ID_COLUMN),
        title=title,
        completed=completed,
    )
