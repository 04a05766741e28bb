"""AWS Lambda entry point.

Mangum translates API Gateway HTTP API (v2) events into ASGI. Lifespan runs
once per cold start, so the DynamoDB client and table context are built there
and reused by every invocation the execution environment serves.
"""

from mangum import Mangum

from todo_api.config import settings
from todo_api.main import app

handler = Mangum(
    app,
    lifespan="auto",
    api_gateway_base_path=settings.api_gateway_base_path,
)
