from dataclasses import dataclass
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from todo_api.exceptions.todo_exceptions import ConfigMissing


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    environment: str = "development"
    log_level: str = "INFO"

    # DynamoDB
    aws_region: str = "us-east-1"
    todo_table: Optional[str] = None  # env TODO_TABLE
    dynamodb_endpoint_url: Optional[str] = (
        None  # Override for DynamoDB Local: http://localhost:8001
    )
    store_call_timeout_seconds: Optional[float] = None  # None = client default
    default_page_size: Optional[int] = None  # None = store default (1 MB page)

    # Strip the API Gateway stage prefix from paths (GET /prod/todo -> GET /todo)
    api_gateway_base_path: str = "/"


settings = Settings()


def resolve_table_name(source: Optional[Settings] = None) -> str:
    """Return the configured todo table name or raise ConfigMissing."""
    source = source or settings
    table_name = (source.todo_table or "").strip()
    if not table_name:
        raise ConfigMissing("TODO_TABLE is not configured")
    return table_name


@dataclass(frozen=True)
class TodoContext:
    """Everything a request needs to reach the store, resolved once at startup."""

    client: Any
    table_name: str
    call_timeout: Optional[float] = None

    @classmethod
    def from_settings(cls, client, source: Optional[Settings] = None) -> "TodoContext":
        source = source or settings
        return cls(
            client=client,
            table_name=resolve_table_name(source),
            call_timeout=source.store_call_timeout_seconds,
        )
