"""Host-facing store interface.

A host application registers stores by ``public_name`` and drives them
through two steps: ``init(config)`` with the store's configuration, then
``run(done)`` once the application starts.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from dynamo_store.core import get_logger

DoneCallback = Callable[[Optional[BaseException]], None]


class Store(ABC):
    """Abstract base class for stores plugged into a host application."""

    type = "store"
    public_name = "store"
    logger_name = "store"

    def __init__(self) -> None:
        self._logger = get_logger(self.logger_name)

    @property
    def logger(self) -> Any:
        return self._logger

    @abstractmethod
    def init(self, config: Any) -> None:
        """Apply the store configuration.

        Args:
            config: Store configuration, typically a mapping from the host
        """
        pass

    @abstractmethod
    def run(self, done: Optional[DoneCallback] = None) -> None:
        """Start the store.

        Args:
            done: Called with None on success or the error on failure. When
                omitted, failures are raised.
        """
        pass
