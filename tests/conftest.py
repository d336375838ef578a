"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import main` to work
when running tests, simulating the Lambda environment where code
is deployed from the src/ directory.
"""

import json
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import boto3
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where Code.from_asset("src") makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    # Add repo root first (for imports like infrastructure.*)
    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    # Add src/ for Lambda-style imports (from handlers import ...)
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Lambda environment variables used by handlers
os.environ.setdefault("TABLE_NAME", "test-tickets-table")
os.environ.setdefault("GSI1_NAME", "GSI1")
os.environ.setdefault("AGENT_GROUP", "Agents")

# Create a default boto3 session so resources/clients do not error during import.
boto3.setup_default_session(region_name="eu-west-2")

TABLE_NAME = os.environ["TABLE_NAME"]
STATUS_INDEX = os.environ["GSI1_NAME"]


def create_tickets_table(table_name: str = TABLE_NAME):
    """Create the single ticket table with its status GSI (inside mock_aws)."""
    dynamodb = boto3.resource("dynamodb", region_name="eu-west-2")
    return dynamodb.create_table(
        TableName=table_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
            {"AttributeName": "GSI1PK", "AttributeType": "S"},
            {"AttributeName": "GSI1SK", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": STATUS_INDEX,
                "KeySchema": [
                    {"AttributeName": "GSI1PK", "KeyType": "HASH"},
                    {"AttributeName": "GSI1SK", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            }
        ],
        BillingMode="PAY_PER_REQUEST",
    )


class FakeClock:
    """Deterministic clock: each call is one second after the previous."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> str:
        value = self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def ddb_table():
    """Moto-backed DynamoDB table, torn down after each test."""
    from moto import mock_aws

    with mock_aws():
        yield create_tickets_table()


@pytest.fixture
def ticket_store(ddb_table):
    from repositories.dynamodb_repo import TicketStore

    return TicketStore(TABLE_NAME, STATUS_INDEX)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticket_service(ticket_store, clock):
    from services.ticket_service import TicketService

    return TicketService(ticket_store, clock=clock)


@pytest.fixture
def lambda_env(ddb_table):
    """Fresh handler caches bound to the moto table."""
    from handlers import common

    common.reset()
    yield ddb_table
    common.reset()


def make_event(
    method: str,
    path: str,
    *,
    sub="user-1",
    groups=None,
    body=None,
    query=None,
    path_params=None,
    request_id="req-123",
):
    """Build an API Gateway HTTP API (payload v2) event."""
    request_context = {
        "requestId": request_id,
        "http": {"method": method, "path": path},
    }
    if sub is not None:
        claims = {"sub": sub}
        if groups is not None:
            claims["cognito:groups"] = groups
        request_context["authorizer"] = {"jwt": {"claims": claims}}

    event = {"requestContext": request_context}
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    if query is not None:
        event["queryStringParameters"] = query
    if path_params is not None:
        event["pathParameters"] = path_params
    return event


@pytest.fixture
def api_event():
    return make_event
