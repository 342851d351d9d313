"""Test configuration and fixtures for dynamo-store."""

import pytest
from moto import mock_aws

from dynamo_store import DynamoStore

CREDENTIALS = {
    "access_key_id": "testing",
    "secret_access_key": "testing",
    "region": "us-east-1",
}

USERS_TABLE = {
    "TableName": "users",
    "KeySchema": [
        {"AttributeName": "user_id", "KeyType": "HASH"},
        {"AttributeName": "created", "KeyType": "RANGE"},
    ],
    "AttributeDefinitions": [
        {"AttributeName": "user_id", "AttributeType": "S"},
        {"AttributeName": "created", "AttributeType": "N"},
    ],
    "ProvisionedThroughput": {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5},
}


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Keep tests away from real AWS credentials and profiles."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def credentials():
    """Explicit credentials for a store against mocked AWS."""
    return dict(CREDENTIALS)


@pytest.fixture
def mocked_store(credentials):
    """A store whose DynamoDB calls are served by moto."""
    with mock_aws():
        store = DynamoStore(credentials)
        yield store
        store.close()


@pytest.fixture
def users_table(mocked_store):
    """Create the users table and return its name."""
    mocked_store.call("create_table", USERS_TABLE)
    return USERS_TABLE["TableName"]
