"""Utility functions and decorators."""

import logging.config
import structlog
import yaml
from pathlib import Path
from typing import Optional, Union
from tenacity import retry, retry_if_exception, stop_after_attempt, stop_after_delay, wait_exponential
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

logger = structlog.get_logger(__name__)

# status 0 is what the SDK reports when no HTTP response came back
RETRYABLE_STATUSES = frozenset({0, 429})


def is_transient(error: BaseException) -> bool:
    """Whether ``error`` is worth another attempt: throttling, 5xx or transport failure."""
    if isinstance(error, ApiException):
        status = error.status or 0
        return status in RETRYABLE_STATUSES or status >= 500
    return isinstance(error, (HTTPError, ConnectionError))


def retry_with_backoff(
    max_retries: int = 3,
    backoff_factor: float = 1.5,
    max_wait: float = 60.0,
    max_delay: Optional[float] = None,
):
    """Decorator retrying transient Kubernetes API errors with exponential backoff.

    Client errors such as 403 or 404 are raised at once. ``max_delay`` stops
    retrying once that many seconds have passed since the first attempt.
    """
    stop = stop_after_attempt(max_retries)
    if max_delay is not None:
        stop = stop | stop_after_delay(max_delay)
    return retry(
        retry=retry_if_exception(is_transient),
        stop=stop,
        wait=wait_exponential(multiplier=backoff_factor, max=max_wait),
        before_sleep=lambda state: logger.debug(
            "Retrying API call",
            attempt=state.attempt_number,
            error=str(state.outcome.exception()),
        ),
        reraise=True
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    config_path: Optional[Union[str, Path]] = None,
) -> None:
    """Setup structured logging configuration."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(
            level=getattr(logging, log_level.upper()),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
