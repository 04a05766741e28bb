#!/usr/bin/env python3
"""
CDK app entry point.

Usage
-----
Install CDK dependencies first:
    pip install -e ".[infra]"

Bootstrap (once per account/region):
    cdk bootstrap aws://<ACCOUNT_ID>/us-east-1

Deploy staging:
    cdk deploy TodoStore-Staging

Deploy prod:
    cdk deploy TodoStore-Prod
"""

import aws_cdk as cdk
from stacks.todo_store_stack import TodoStoreConfig, TodoStoreStack

app = cdk.App()

# ── Staging ───────────────────────────────────────────────────────────────────
TodoStoreStack(
    app,
    "TodoStore-Staging",
    config=TodoStoreConfig(environment="staging"),
    env=cdk.Environment(region="us-east-1"),
)

# ── Production ────────────────────────────────────────────────────────────────
TodoStoreStack(
    app,
    "TodoStore-Prod",
    config=TodoStoreConfig(
        environment="prod",
        memory_size=512,
        store_call_timeout_seconds=3.0,
    ),
    env=cdk.Environment(region="us-east-1"),
)

app.synth()
