"""
AWS CDK stack for the Todo Store service.

Provisions for both staging and prod:
  - DynamoDB table keyed on user_id (partition) / todo_id (sort), on-demand
  - Python Lambda running the FastAPI app through Mangum
  - API Gateway HTTP API proxying every route to the Lambda

Code asset: the repo root, with dependencies installed by CDK's Docker
bundling. Run cdk deploy from infra/cdk; Docker must be available.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

from aws_cdk import (
    BundlingOptions,
    CfnOutput,
    Duration,
    RemovalPolicy,
    Stack,
)
from aws_cdk import aws_apigatewayv2 as apigwv2
from aws_cdk import aws_apigatewayv2_integrations as integrations
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_logs as logs
from constructs import Construct

REPO_ROOT = Path(__file__).resolve().parents[3]


@dataclasses.dataclass
class TodoStoreConfig:
    environment: str
    memory_size: int = 256
    timeout_seconds: int = 10
    store_call_timeout_seconds: float | None = None
    log_retention: logs.RetentionDays = logs.RetentionDays.ONE_WEEK


class TodoStoreStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: TodoStoreConfig,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        env = config.environment

        # ── DynamoDB — todo table ─────────────────────────────────────────────
        todo_table = dynamodb.Table(
            self,
            "TodoTable",
            table_name=f"todo-items-{env}",
            partition_key=dynamodb.Attribute(
                name="user_id", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(
                name="todo_id", type=dynamodb.AttributeType.STRING
            ),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=env == "prod",
            removal_policy=(
                RemovalPolicy.RETAIN if env == "prod" else RemovalPolicy.DESTROY
            ),
        )

        # ── Lambda ────────────────────────────────────────────────────────────
        function_env = {
            "TODO_TABLE": todo_table.table_name,
            "ENVIRONMENT": env,
            "LOG_LEVEL": "INFO",
        }
        if config.store_call_timeout_seconds is not None:
            function_env["STORE_CALL_TIMEOUT_SECONDS"] = str(
                config.store_call_timeout_seconds
            )

        api_function = lambda_.Function(
            self,
            "ApiFunction",
            function_name=f"todo-api-{env}",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler="todo_api.lambda_handler.handler",
            code=lambda_.Code.from_asset(
                str(REPO_ROOT),
                exclude=["infra", "tests", ".git", "cdk.out", "*.md"],
                bundling=BundlingOptions(
                    image=lambda_.Runtime.PYTHON_3_12.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install . -t /asset-output",
                    ],
                ),
            ),
            memory_size=config.memory_size,
            timeout=Duration.seconds(config.timeout_seconds),
            environment=function_env,
            log_retention=config.log_retention,
        )
        todo_table.grant_read_write_data(api_function)

        # ── HTTP API ──────────────────────────────────────────────────────────
        http_api = apigwv2.HttpApi(
            self,
            "HttpApi",
            api_name=f"todo-api-{env}",
            default_integration=integrations.HttpLambdaIntegration(
                "ApiIntegration", api_function
            ),
        )

        # ── Stack outputs ─────────────────────────────────────────────────────
        CfnOutput(
            self,
            "ApiUrl",
            value=http_api.api_endpoint,
            description="HTTP API endpoint",
        )
        CfnOutput(
            self,
            "TodoTableName",
            value=todo_table.table_name,
            description="DynamoDB todo table",
        )
