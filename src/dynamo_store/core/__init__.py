"""Core utilities and shared components for dynamo-store."""

from .config import settings
from .exceptions import DataError, DynamoStoreError
from .observability import get_logger, get_tracer

__all__ = ["settings", "DataError", "DynamoStoreError", "get_logger", "get_tracer"]
