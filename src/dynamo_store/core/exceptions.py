"""Exception hierarchy for dynamo-store.

Every error raised or delivered by the store carries a ``namespace`` (always
``DYNAMO``) and a ``code``; together they form the host-facing
``error_code`` such as ``DYNAMO.IAM`` or ``DYNAMO.ResourceNotFoundException``.
"""

from typing import Any, Optional

NAMESPACE = "DYNAMO"

CODE_IAM = "IAM"
CODE_CONFIG = "CONFIG"
CODE_RUN = "RUN"
CODE_DATA = "DATA"
CODE_UNEXPECTED = "UNEXPECTED"


class DynamoStoreError(Exception):
    """Base exception for all dynamo-store errors."""

    default_code = CODE_UNEXPECTED
    default_status = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status: Optional[int] = None,
        data: Optional[dict[str, Any]] = None,
        errors: Optional[list[dict[str, Any]]] = None,
        source: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.status = status if status is not None else self.default_status
        self.namespace = NAMESPACE
        self.data = data or {}
        self.errors = errors or []
        self.source = source
        super().__init__(message)

    @property
    def error_code(self) -> str:
        return f"{self.namespace}.{self.code}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error without tracebacks."""
        payload: dict[str, Any] = {
            "code": self.error_code,
            "ns": self.namespace,
            "message": self.message,
            "status": self.status,
        }
        if self.data:
            payload["data"] = self.data
        if self.errors:
            payload["errors"] = self.errors
        return payload

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class CredentialsError(DynamoStoreError):
    """Raised when no credentials are configured for a remote endpoint."""

    default_code = CODE_IAM
    default_status = 400


class ConfigurationError(DynamoStoreError):
    """Raised when the store configuration is incomplete."""

    default_code = CODE_CONFIG
    default_status = 400


class ConnectivityError(DynamoStoreError):
    """Raised when the connectivity probe against DynamoDB fails."""

    default_code = CODE_RUN
    default_status = 500


class DataError(DynamoStoreError):
    """Raised when a call is made with missing or invalid arguments."""

    default_code = CODE_DATA
    default_status = 400


class ServiceError(DynamoStoreError):
    """A DynamoDB or botocore error translated into the store convention."""

    pass
