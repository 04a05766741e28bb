from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from todo_api.config import TodoContext, settings
from todo_api.dynamodb import get_todo_context
from todo_api.repositories.todo_repository import TodoRepository
from todo_api.schemas.todo import (
    ErrorResponse,
    TodoCreate,
    TodoDeleted,
    TodoItem,
    TodoPage,
    TodoUpdate,
)
from todo_api.services.todo_service import TodoService

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "model": ErrorResponse,
            "description": "DynamoDB call failed or timed out.",
        },
    },
)

_BAD_ID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}


def get_service(context: TodoContext = Depends(get_todo_context)) -> TodoService:
    return TodoService(repo=TodoRepository(context))


@router.post("", response_model=TodoItem, status_code=status.HTTP_201_CREATED)
async def create_todo(
    payload: TodoCreate,
    service: TodoService = Depends(get_service),
):
    return await service.create_todo(payload)


@router.get(
    "/user/{owner_id}/id/{item_id}",
    response_model=Optional[TodoItem],
    responses=_BAD_ID,
    description="Returns `null` when the item does not exist.",
)
async def get_todo(
    owner_id: str,
    item_id: str,
    service: TodoService = Depends(get_service),
):
    return await service.get_todo(owner_id, item_id)


@router.put("/user/{owner_id}/id/{item_id}", response_model=TodoItem, responses=_BAD_ID)
async def update_todo(
    owner_id: str,
    item_id: str,
    payload: TodoUpdate,
    service: TodoService = Depends(get_service),
):
    return await service.update_todo(owner_id, item_id, payload)


@router.delete(
    "/user/{owner_id}/id/{item_id}", response_model=TodoDeleted, responses=_BAD_ID
)
async def delete_todo(
    owner_id: str,
    item_id: str,
    service: TodoService = Depends(get_service),
):
    await service.delete_todo(owner_id, item_id)
    return TodoDeleted()


@router.get("/user/{owner_id}", response_model=TodoPage, responses=_BAD_ID)
async def list_todos(
    owner_id: str,
    after: Optional[str] = Query(
        None, description="item_id from the previous page's page_token"
    ),
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: TodoService = Depends(get_service),
):
    return await service.list_todos(
        owner_id, after=after, limit=limit or settings.default_page_size
    )
