"""Base class for clients that wrap a blocking cluster SDK."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, TypeVar
import structlog

from .exceptions import ClientConnectionException

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_CALL_TIMEOUT = 120.0
DEFAULT_RETRY_ATTEMPTS = 3


class BaseClient(ABC):
    """Async client over a blocking SDK.

    Settings read from ``config``:
        call_timeout_seconds: Upper bound for any single call, retries included.
        retry_attempts: Attempts per call for transient failures (1 disables retries).

    Blocking SDK work goes through ``run_blocking`` so it never stalls the
    event loop and never outlives ``call_timeout``.
    """

    def __init__(self, config: Dict[str, Any], name: Optional[str] = None):
        self.config = config
        self.name = name or self.__class__.__name__
        self.call_timeout = float(config.get("call_timeout_seconds", DEFAULT_CALL_TIMEOUT))
        self.retry_attempts = int(config.get("retry_attempts", DEFAULT_RETRY_ATTEMPTS))
        self._connected = False
        self.logger = logger.bind(client=self.name)

    @abstractmethod
    async def connect(self) -> None:
        """Load credentials and open the SDK session."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the SDK session."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Whether the remote end answers within ``call_timeout``."""

    @property
    def is_connected(self) -> bool:
        return self._connected

    def require_connected(self) -> None:
        if not self._connected:
            raise ClientConnectionException(self.name, "client not connected")

    async def run_blocking(self, func: Callable[..., T], *args: Any) -> T:
        """Run ``func(*args)`` in a worker thread, bounded by ``call_timeout``.

        Raises:
            TimeoutError: The call did not finish in time. The worker thread
                may still be running; ``func`` must check its own deadline
                before any side effect.
        """
        async with asyncio.timeout(self.call_timeout):
            return await asyncio.to_thread(func, *args)

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
