import uuid
from contextlib import asynccontextmanager

import aioboto3
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_api.config import TodoContext, settings
from todo_api.exceptions.todo_exceptions import ConfigMissing, TodoError
from todo_api.logging_config import configure_logging, get_logger
from todo_api.routers import health, todos

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("application_starting", environment=settings.environment)

    session = aioboto3.Session()
    async with session.client(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url or None,
    ) as dynamodb_client:
        app.state.dynamodb_client = dynamodb_client
        try:
            app.state.todo_context = TodoContext.from_settings(dynamodb_client, settings)
        except ConfigMissing as exc:
            logger.error("application_misconfigured", error=exc.message)
            raise

        logger.info("application_started", table_name=app.state.todo_context.table_name)
        yield

    logger.info("application_stopped")


app = FastAPI(
    title="Todo Store API",
    description="CRUD API for per-user todo items stored in DynamoDB.",
    version="1.0.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        correlation_id=correlation_id,
        method=request.method,
        path=request.url.path,
    )
    response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id
    return response


@app.exception_handler(TodoError)
async def todo_error_handler(request: Request, exc: TodoError):
    logger.warning(
        "request_failed",
        error_kind=type(exc).__name__,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info("request_rejected", error=message)
    return JSONResponse(status_code=422, content={"error": message})


app.include_router(todos.router)
app.include_router(health.router)
