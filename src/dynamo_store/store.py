"""DynamoDB store: configuration, connectivity and forwarded operations.

Every forwarded operation takes the SDK request parameters as a mapping
(plus keyword overrides) and an optional callback:

    >>> store = DynamoStore({"key": "...", "secret": "...", "region": "eu-west-1"})
    >>> future = store.get_item({"TableName": "users", "Key": {"id": {"S": "1"}}})
    >>> item = future.result()

    >>> def on_item(err, data):
    ...     ...
    >>> store.get_item({"TableName": "users", "Key": {"id": {"S": "1"}}}, on_item)

From asyncio, wrap the returned future: ``await asyncio.wrap_future(future)``.
"""

import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from dynamo_store.clients import DynamoClientManager
from dynamo_store.core import get_tracer, settings
from dynamo_store.core.exceptions import (
    ConfigurationError,
    DataError,
    DynamoStoreError,
)
from dynamo_store.errors import translate_error
from dynamo_store.interface import DoneCallback, Store
from dynamo_store.schemas import DynamoStoreConfig, merge_config

tracer = get_tracer(__name__)

ResultCallback = Callable[[Optional[DynamoStoreError], Any], None]

OPERATIONS = (
    "batch_get_item",
    "batch_write_item",
    "create_table",
    "delete_table",
    "describe_table",
    "list_tables",
    "update_table",
    "put_item",
    "get_item",
    "delete_item",
    "update_item",
    "query",
    "scan",
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """Convert an SDK-style name (``putItem``, ``tableExists``) to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _forward(operation: str):
    def method(
        self: "DynamoStore",
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[ResultCallback] = None,
        **kwargs: Any,
    ) -> Optional["Future[Any]"]:
        return self._dispatch(operation, params, callback, kwargs)

    method.__name__ = operation
    method.__qualname__ = f"DynamoStore.{operation}"
    method.__doc__ = (
        f"Forward ``{operation}`` to DynamoDB.\n\n"
        "Returns a Future resolving to the SDK response, or None when a "
        "callback(error, result) is given."
    )
    return method


class DynamoStore(Store):
    """Store exposing a configured DynamoDB client to the host application."""

    type = "dynamo"
    public_name = "dynamo"
    logger_name = "store.dynamo"

    def __init__(self, config: Any = None):
        super().__init__()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()
        self._apply_config(config)

    def _apply_config(self, config: Any) -> None:
        # Invalid configurations are kept as an error and delivered by run()
        # and every call until init() supplies a valid one
        self._config_error: Optional[ConfigurationError] = None
        try:
            self._config = merge_config(config)
        except ValidationError as e:
            self._config = DynamoStoreConfig()
            self._config_error = ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                errors=[
                    {k: v for k, v in err.items() if k != "input"}
                    for err in e.errors(include_url=False, include_context=False)
                ],
            )
            self.logger.error(
                "Invalid DynamoDB store configuration",
                errors=self._config_error.errors,
            )
        self._manager = DynamoClientManager(self._config)

    @property
    def config(self) -> DynamoStoreConfig:
        return self._config

    def init(self, config: Any) -> None:
        """Merge the store configuration with defaults, dropping any cached client."""
        self._apply_config(config)
        self.logger.debug("DynamoDB store configured", region=self._config.region)

    def run(self, done: Optional[DoneCallback] = None) -> None:
        """Validate the configuration and probe DynamoDB with one list_tables call."""
        try:
            if self._config_error is not None:
                raise self._config_error
            self._manager.test_connection()
        except DynamoStoreError as e:
            if done is None:
                raise
            done(e)
            return

        self.logger.info("DynamoDB store running", region=self._config.region)
        if done is not None:
            done(None)

    @property
    def client(self):
        """The cached boto3 DynamoDB client, created on first access."""
        if self._config_error is not None:
            raise self._config_error
        try:
            return self._manager.client
        except DynamoStoreError:
            raise
        except Exception as e:
            raise translate_error(e, debug=self._config.debug, log=self.logger) from None

    def get_instance(self):
        return self.client

    @property
    def executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=settings.max_workers, thread_name_prefix="dynamo-store"
                )
            return self._executor

    def close(self) -> None:
        """Shut down the worker pool, waiting for pending calls."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "DynamoStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    batch_get_item = _forward("batch_get_item")
    batch_write_item = _forward("batch_write_item")
    create_table = _forward("create_table")
    delete_table = _forward("delete_table")
    describe_table = _forward("describe_table")
    list_tables = _forward("list_tables")
    update_table = _forward("update_table")
    put_item = _forward("put_item")
    get_item = _forward("get_item")
    delete_item = _forward("delete_item")
    update_item = _forward("update_item")
    query = _forward("query")
    scan = _forward("scan")

    def call(
        self,
        operation: str,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """Run a forwarded operation synchronously.

        Args:
            operation: Operation name, snake_case or camelCase (``putItem``)
            params: SDK request parameters
            **kwargs: Parameters applied on top of ``params``

        Returns:
            The SDK response

        Raises:
            DataError: If the operation is not one of the forwarded operations
            DynamoStoreError: If the call fails
        """
        name = to_snake_case(operation)
        if name not in OPERATIONS:
            raise DataError(
                f"Unsupported operation: {operation}", data={"operation": operation}
            )
        return self._execute(self.client, name, self._request(params, kwargs))

    def wait_for(
        self,
        state: Optional[str],
        params: Optional[Mapping[str, Any]] = None,
        callback: Optional[ResultCallback] = None,
        **kwargs: Any,
    ) -> Optional["Future[Any]"]:
        """Wait until a table reaches ``state`` (``table_exists``/``tableExists``,
        ``table_not_exists``/``tableNotExists``).

        The result is None once the state is reached.
        """
        if not state:
            return self._fail(DataError("Missing wait state name"), callback)

        waiter_name = to_snake_case(state)
        try:
            client = self.client
        except DynamoStoreError as e:
            return self._fail(e, callback)

        try:
            waiter = client.get_waiter(waiter_name)
        except ValueError:
            return self._fail(
                DataError(f"Unknown wait state: {state}", data={"state": state}),
                callback,
            )

        request = self._request(params, kwargs)
        future = self.executor.submit(self._wait, waiter, waiter_name, request)
        return self._deliver(future, callback)

    @staticmethod
    def _request(
        params: Optional[Mapping[str, Any]], overrides: Mapping[str, Any]
    ) -> dict[str, Any]:
        request = dict(params or {})
        request.update(overrides)
        return request

    def _dispatch(
        self,
        operation: str,
        params: Optional[Mapping[str, Any]],
        callback: Optional[ResultCallback],
        overrides: Mapping[str, Any],
    ) -> Optional["Future[Any]"]:
        # Resolve the client here so configuration errors never reach the pool
        try:
            client = self.client
        except DynamoStoreError as e:
            return self._fail(e, callback)

        request = self._request(params, overrides)
        future = self.executor.submit(self._execute, client, operation, request)
        return self._deliver(future, callback)

    def _execute(self, client: Any, operation: str, request: dict[str, Any]) -> Any:
        with tracer.start_as_current_span(f"dynamodb.{operation}") as span:
            span.set_attribute("db.system", "dynamodb")
            span.set_attribute("db.operation", operation)
            try:
                return getattr(client, operation)(**request)
            except Exception as e:
                raise translate_error(
                    e, debug=self._config.debug, log=self.logger
                ) from None

    def _wait(self, waiter: Any, waiter_name: str, request: dict[str, Any]) -> None:
        with tracer.start_as_current_span("dynamodb.wait_for") as span:
            span.set_attribute("db.system", "dynamodb")
            span.set_attribute("db.operation", waiter_name)
            try:
                waiter.wait(**request)
            except Exception as e:
                raise translate_error(
                    e, debug=self._config.debug, log=self.logger
                ) from None
        return None

    def _fail(
        self, error: DynamoStoreError, callback: Optional[ResultCallback]
    ) -> Optional["Future[Any]"]:
        future: Future[Any] = Future()
        future.set_exception(error)
        return self._deliver(future, callback)

    def _deliver(
        self, future: "Future[Any]", callback: Optional[ResultCallback]
    ) -> Optional["Future[Any]"]:
        if callback is None:
            return future

        def on_done(done: "Future[Any]") -> None:
            error = done.exception()
            try:
                if error is not None:
                    callback(error, None)  # type: ignore[arg-type]
                else:
                    callback(None, done.result())
            except Exception:
                # The call itself completed; a failing callback is only logged
                self.logger.exception(
                    "Store callback raised",
                    callback=getattr(callback, "__name__", repr(callback)),
                )

        future.add_done_callback(on_done)
        return None
