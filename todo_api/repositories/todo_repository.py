import asyncio
from typing import Optional
from uuid import UUID

from botocore.exceptions import BotoCoreError, ClientError

from todo_api.config import TodoContext
from todo_api.exceptions.todo_exceptions import StoreUnavailable
from todo_api.logging_config import get_logger
from todo_api.repositories import keys
from todo_api.repositories.codec import (
    COMPLETED_COLUMN,
    DEFAULT_COMPLETED,
    DEFAULT_TITLE,
    TITLE_COLUMN,
    decode,
    encode,
)
from todo_api.repositories.pagination import normalize
from todo_api.schemas.todo import TodoItem, TodoPage

logger = get_logger(__name__)

_DEFAULTS = {
    TITLE_COLUMN: {"S": DEFAULT_TITLE},
    COMPLETED_COLUMN: {"BOOL": DEFAULT_COMPLETED},
}


class TodoRepository:
    def __init__(self, context: TodoContext) -> None:
        self._client = context.client
        self._table_name = context.table_name
        self._timeout = context.call_timeout

    async def _call(self, operation: str, **kwargs) -> dict:
        """Run one DynamoDB call, translating client failures to StoreUnavailable."""
        method = getattr(self._client, operation)
        try:
            if self._timeout is None:
                return await method(TableName=self._table_name, **kwargs)
            return await asyncio.wait_for(
                method(TableName=self._table_name, **kwargs), timeout=self._timeout
            )
        except asyncio.TimeoutError as exc:
            logger.warning("store_call_timed_out", operation=operation, timeout=self._timeout)
            raise StoreUnavailable(
                f"{operation} did not complete within {self._timeout}s"
            ) from exc
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            logger.warning("store_call_failed", operation=operation, error_code=code)
            raise StoreUnavailable(f"{operation} failed: {code}") from exc
        except BotoCoreError as exc:
            logger.warning("store_call_failed", operation=operation, error=str(exc))
            raise StoreUnavailable(f"{operation} failed: {exc}") from exc

    async def put(self, todo: TodoItem) -> TodoItem:
        """Unconditional write; replaces any item with the same key."""
        await self._call("put_item", Item=encode(todo))
        return todo

    async def get(self, owner_id: UUID, item_id: UUID) -> Optional[TodoItem]:
        """Fetch one todo. Returns None when the key does not exist."""
        response = await self._call(
            "get_item", Key=keys.build_primary_key(owner_id, item_id)
        )
        item = response.get("Item")
        if not item:
            return None
        return decode(item)

    async def update(self, owner_id: UUID, item_id: UUID, changes: dict) -> TodoItem:
        """Merge ``changes`` into the stored item, creating it with defaults if absent."""
        assignments = []
        names = {}
        values = {}
        for column in (TITLE_COLUMN, COMPLETED_COLUMN):
            names[f"#{column}"] = column
            if column in changes:
                type_key = "S" if column == TITLE_COLUMN else "BOOL"
                values[f":{column}"] = {type_key: changes[column]}
                assignments.append(f"#{column} = :{column}")
            else:
                values[f":{column}"] = _DEFAULTS[column]
                assignments.append(f"#{column} = if_not_exists(#{column}, :{column})")

        response = await self._call(
            "update_item",
            Key=keys.build_primary_key(owner_id, item_id),
            UpdateExpression="SET " + ", ".join(assignments),
            ExpressionAttributeNames=names,
            ExpressionAttributeValues=values,
            ReturnValues="ALL_NEW",
        )
        return decode(response.get("Attributes", {}))

    async def delete(self, owner_id: UUID, item_id: UUID) -> None:
        """Ensure absence; deleting a missing key succeeds."""
        await self._call("delete_item", Key=keys.build_primary_key(owner_id, item_id))

    async def list_by_owner(
        self,
        owner_id: UUID,
        after_item_id: Optional[UUID] = None,
        limit: Optional[int] = None,
    ) -> TodoPage:
        query = keys.build_partition_condition(owner_id)
        start_key = keys.build_start_key(owner_id, after_item_id)
        if start_key is not None:
            query["ExclusiveStartKey"] = start_key
        if limit is not None:
            query["Limit"] = limit

        response = await self._call("query", ScanIndexForward=True, **query)
        return normalize(response.get("Items"), response.get("LastEvaluatedKey"))
