from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TodoCreate(BaseModel):
    # Parsed by the key builder so a bad id is an InvalidIdentifier (400).
    owner_id: str = Field(..., examples=["0190a5f2-7c1e-7d3a-9b1c-2f4e6a8b0c1d"])
    item_id: Optional[str] = None
    title: Optional[str] = Field(None, examples=["Buy milk"])
    completed: Optional[bool] = None


class TodoUpdate(BaseModel):
    # Identity comes from the path; owner_id / item_id in the body are dropped.
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, examples=["Buy oat milk"])
    completed: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TodoItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_id: UUID
    item_id: UUID
    title: str
    completed: bool


class PageToken(BaseModel):
    owner_id: Optional[str] = None
    item_id: Optional[str] = None


class TodoPage(BaseModel):
    items: List[TodoItem] = Field(default_factory=list)
    page_token: Optional[PageToken] = None


class TodoDeleted(BaseModel):
    deleted: bool = True


class ErrorResponse(BaseModel):
    error: str
