"""A DynamoDB store plugin for host applications.

This package provides a configured boto3 DynamoDB client behind a uniform
store interface. Table management, item CRUD, query/scan and wait-for-state
calls are forwarded to the SDK, and SDK errors are translated into
``DYNAMO.*`` store errors.

Key Features:
    - Configuration merging with defaults and legacy key/secret names
    - Lazy, cached client creation with a connectivity probe
    - Future- or callback-style forwarded operations
    - Error translation under the ``DYNAMO`` namespace
    - CLI interface

Recommended Usage:
    >>> from dynamo_store import DynamoStore
    >>> store = DynamoStore({"key": "...", "secret": "...", "region": "eu-west-1"})
    >>> store.run()
    >>> tables = store.list_tables().result()

Host Registration:
    >>> import dynamo_store
    >>> StoreClass = dynamo_store.init({"name": "sessions"})
    >>> StoreClass.public_name
    'dynamo'
"""

__version__ = "0.1.0"

from typing import Any, Mapping, Optional

from .clients import DynamoClientManager
from .core.exceptions import (
    ConfigurationError,
    ConnectivityError,
    CredentialsError,
    DataError,
    DynamoStoreError,
    ServiceError,
)
from .errors import translate_error
from .interface import Store
from .schemas import DynamoStoreConfig, merge_config
from .store import OPERATIONS, DynamoStore

public_name = "dynamo"


def init(opt: Optional[Mapping[str, Any]] = None) -> type[DynamoStore]:
    """Plugin entry point: return the store class to register with the host.

    Args:
        opt: Plugin options; ``name`` sets the logger name to ``store.<name>``

    Returns:
        A DynamoStore subclass bound to the requested logger name
    """
    name = (opt or {}).get("name") or public_name
    return type(
        "DynamoStore",
        (DynamoStore,),
        {"logger_name": f"store.{name}", "__module__": DynamoStore.__module__},
    )


__all__ = [
    # Store
    "DynamoStore",
    "OPERATIONS",
    "Store",
    "init",
    "public_name",
    # Configuration
    "DynamoStoreConfig",
    "merge_config",
    # Client
    "DynamoClientManager",
    # Errors
    "ConfigurationError",
    "ConnectivityError",
    "CredentialsError",
    "DataError",
    "DynamoStoreError",
    "ServiceError",
    "translate_error",
]
