"""Translation of botocore errors into the store error convention."""

from typing import Any, Optional

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ParamValidationError,
    WaiterError,
)

from dynamo_store.core import get_logger
from dynamo_store.core.exceptions import CODE_UNEXPECTED, DynamoStoreError, ServiceError

logger = get_logger(__name__)

# Keys that carry stack information in nested error payloads
STACK_KEYS = ("stack", "Stack", "stack_trace", "StackTrace", "traceback")


def strip_traceback(exc: BaseException) -> BaseException:
    """Drop tracebacks from an exception and everything chained to it."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        current.__traceback__ = None
        current = current.__cause__ or current.__context__
    return exc


def _clean_sub_error(item: Any) -> dict[str, Any]:
    if isinstance(item, BaseException):
        return {"code": type(item).__name__, "message": str(item)}
    if not isinstance(item, dict):
        return {"message": str(item)}
    cleaned = {k: v for k, v in item.items() if k not in STACK_KEYS}
    if "Code" in cleaned and "code" not in cleaned:
        cleaned["code"] = cleaned.pop("Code")
    if "Message" in cleaned and "message" not in cleaned:
        cleaned["message"] = cleaned.pop("Message")
    return cleaned


def _sub_errors(items: Any) -> list[dict[str, Any]]:
    if not items:
        return []
    return [_clean_sub_error(item) for item in items]


def _from_client_error(exc: ClientError) -> ServiceError:
    response = exc.response or {}
    error = response.get("Error", {})
    metadata = response.get("ResponseMetadata", {})

    data: dict[str, Any] = {"operation": exc.operation_name}
    if metadata.get("RequestId"):
        data["request_id"] = metadata["RequestId"]

    return ServiceError(
        error.get("Message") or str(exc),
        code=error.get("Code") or CODE_UNEXPECTED,
        status=metadata.get("HTTPStatusCode") or 400,
        data=data,
        errors=_sub_errors(response.get("CancellationReasons")),
    )


def _from_waiter_error(exc: WaiterError) -> ServiceError:
    last = exc.last_response or {}
    errors = []
    if "Error" in last:
        errors.append(_clean_sub_error(last["Error"]))
    return ServiceError(
        exc.kwargs.get("reason") or str(exc),
        code="WaiterError",
        status=500,
        data={"waiter": exc.kwargs.get("name")},
        errors=errors,
    )


def translate_error(
    exc: BaseException, *, debug: bool = False, log: Any = None
) -> DynamoStoreError:
    """Convert any exception raised by a DynamoDB call into a DynamoStoreError.

    Errors that already follow the store convention are returned unchanged.
    The original exception is attached as ``source`` with its traceback (and
    that of every chained exception) stripped.

    Args:
        exc: The exception raised by boto3/botocore
        debug: Log the translated error at warning level
        log: Logger used in debug mode, defaults to this module's logger

    Returns:
        The translated error, namespaced under ``DYNAMO``
    """
    if isinstance(exc, DynamoStoreError):
        return exc

    if isinstance(exc, ClientError):
        translated: DynamoStoreError = _from_client_error(exc)
    elif isinstance(exc, WaiterError):
        translated = _from_waiter_error(exc)
    elif isinstance(exc, BotoCoreError):
        status = 400 if isinstance(exc, ParamValidationError) else 500
        translated = ServiceError(str(exc), code=type(exc).__name__, status=status)
    else:
        translated = DynamoStoreError(
            str(exc) or type(exc).__name__, code=CODE_UNEXPECTED, status=500
        )

    translated.source = strip_traceback(exc)

    if debug:
        (log or logger).warning(
            "DynamoDB error",
            code=translated.error_code,
            message=translated.message,
            status=translated.status,
            errors=translated.errors,
        )
    return translated
