"""Composite key construction for the todo table.

The table is keyed on ``user_id`` (partition) and ``todo_id`` (sort), both
stored as DynamoDB strings. Only ``S`` encodings are understood when reading
keys back from the store; numeric or binary keys are not supported.
"""

from typing import Optional, Union
from uuid import UUID

from todo_api.exceptions.todo_exceptions import InvalidIdentifier
from todo_api.schemas.todo import PageToken

USER_ID_COLUMN = "user_id"
TODO_ID_COLUMN = "todo_id"

Identifier = Union[str, UUID]


def parse_identifier(value: Identifier, field: str) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError) as exc:
        raise InvalidIdentifier(f"{field} '{value}' is not a valid identifier") from exc


def build_primary_key(owner_id: Identifier, item_id: Identifier) -> dict:
    owner = parse_identifier(owner_id, "owner_id")
    item = parse_identifier(item_id, "item_id")
    return {
        USER_ID_COLUMN: {"S": str(owner)},
        TODO_ID_COLUMN: {"S": str(item)},
    }


def build_partition_condition(owner_id: Identifier) -> dict:
    """Query kwargs selecting every item in one owner's partition."""
    owner = parse_identifier(owner_id, "owner_id")
    return {
        "KeyConditionExpression": "#pk = :owner",
        "ExpressionAttributeNames": {"#pk": USER_ID_COLUMN},
        "ExpressionAttributeValues": {":owner": {"S": str(owner)}},
    }


def build_start_key(
    owner_id: Identifier, after_item_id: Optional[Identifier]
) -> Optional[dict]:
    """ExclusiveStartKey resuming a listing after ``after_item_id``."""
    if after_item_id is None:
        return None
    return build_primary_key(owner_id, after_item_id)


def page_token_from_key(key: Optional[dict]) -> Optional[PageToken]:
    if key is None:
        return None
    return PageToken(
        owner_id=key.get(USER_ID_COLUMN, {}).get("S"),
        item_id=key.get(TODO_ID_COLUMN, {}).get("S"),
    )
