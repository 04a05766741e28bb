from fastapi import Request

from todo_api.config import TodoContext, resolve_table_name, settings


def get_dynamodb_client(request: Request):
    """FastAPI dependency — returns the aioboto3 DynamoDB low-level client
    stored on app.state during lifespan startup."""
    return getattr(request.app.state, "dynamodb_client", None)


def get_todo_context(request: Request) -> TodoContext:
    """FastAPI dependency — the context built at startup, or one resolved now
    when the lifespan did not run (raises ConfigMissing without a table name)."""
    context = getattr(request.app.state, "todo_context", None)
    if context is not None:
        return context
    table_name = resolve_table_name(settings)
    return TodoContext(
        client=get_dynamodb_client(request),
        table_name=table_name,
        call_timeout=settings.store_call_timeout_seconds,
    )
