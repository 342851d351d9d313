"""DynamoDB client management and configuration."""

from .dynamo_client import DynamoClientManager

__all__ = ["DynamoClientManager"]
