"""Shared pytest fixtures."""

import re
import uuid
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from todo_api.config import TodoContext
from todo_api.dynamodb import get_todo_context

TABLE_NAME = "todo-items-test"
OWNER_ID = "0190a5f2-7c1e-7d3a-9b1c-2f4e6a8b0c1d"

_CLAUSE_SEPARATOR = re.compile(r",\s*(?![^(]*\))")
_ASSIGNMENT = re.compile(
    r"^(?P<name>#\w+) = (?:if_not_exists\((?P<guard>#\w+), (?P<default>:\w+)\)|(?P<value>:\w+))$"
)


class FakeDynamoDBClient:
    """In-memory stand-in for the aioboto3 low-level client.

    Understands only the request shapes TodoRepository sends.
    """

    def __init__(self) -> None:
        self.items: dict[tuple[str, str], dict] = {}

    @staticmethod
    def _key(key: dict) -> tuple[str, str]:
        return key["user_id"]["S"], key["todo_id"]["S"]

    async def put_item(self, TableName, Item):
        self.items[self._key(Item)] = dict(Item)
        return {}

    async def get_item(self, TableName, Key):
        item = self.items.get(self._key(Key))
        return {"Item": dict(item)} if item is not None else {}

    async def delete_item(self, TableName, Key):
        self.items.pop(self._key(Key), None)
        return {}

    async def update_item(
        self,
        TableName,
        Key,
        UpdateExpression,
        ExpressionAttributeNames,
        ExpressionAttributeValues,
        ReturnValues="NONE",
    ):
        key = self._key(Key)
        item = dict(self.items.get(key, Key))
        assert UpdateExpression.startswith("SET ")
        for clause in _CLAUSE_SEPARATOR.split(UpdateExpression[len("SET "):]):
            match = _ASSIGNMENT.match(clause)
            assert match, clause
            column = ExpressionAttributeNames[match["name"]]
            if match["value"]:
                item[column] = ExpressionAttributeValues[match["value"]]
            elif column not in item:
                item[column] = ExpressionAttributeValues[match["default"]]
        self.items[key] = item
        return {"Attributes": dict(item)}

    async def query(
        self,
        TableName,
        KeyConditionExpression,
        ExpressionAttributeNames,
        ExpressionAttributeValues,
        ScanIndexForward=True,
        ExclusiveStartKey=None,
        Limit=None,
    ):
        owner = ExpressionAttributeValues[":owner"]["S"]
        rows = sorted(
            (todo_id, item)
            for (user_id, todo_id), item in self.items.items()
            if user_id == owner
        )
        if not ScanIndexForward:
            rows.reverse()
        if ExclusiveStartKey is not None:
            start = ExclusiveStartKey["todo_id"]["S"]
            rows = [row for row in rows if row[0] > start]

        page = [dict(item) for _, item in rows[:Limit]]
        response = {"Items": page, "Count": len(page)}
        if Limit is not None and len(rows) > Limit:
            last = page[-1]
            response["LastEvaluatedKey"] = {
                "user_id": last["user_id"],
                "todo_id": last["todo_id"],
            }
        return response


@pytest.fixture
def fake_dynamodb_client():
    return FakeDynamoDBClient()


@pytest.fixture
def mock_dynamodb_client():
    """AsyncMock replacing the aioboto3 DynamoDB client so no real table is needed."""
    client = AsyncMock()
    client.put_item = AsyncMock(return_value={})
    client.get_item = AsyncMock(return_value={})  # empty = item not found
    client.update_item = AsyncMock(return_value={})
    client.delete_item = AsyncMock(return_value={})
    client.query = AsyncMock(return_value={"Items": [], "Count": 0})
    return client


@pytest.fixture
def store_client(fake_dynamodb_client):
    """The client the API fixture talks to; override to swap in a mock."""
    return fake_dynamodb_client


@pytest.fixture
async def client(store_client):
    from todo_api.main import app

    def override_get_todo_context():
        return TodoContext(client=store_client, table_name=TABLE_NAME)

    app.dependency_overrides[get_todo_context] = override_get_todo_context
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


def store_item(
    owner_id: str = OWNER_ID,
    item_id: str = None,
    title: str = "Buy milk",
    completed: bool = False,
) -> dict:
    return {
        "user_id": {"S": owner_id},
        "todo_id": {"S": item_id or str(uuid.uuid4())},
        "title": {"S": title},
        "completed": {"BOOL": completed},
    }
