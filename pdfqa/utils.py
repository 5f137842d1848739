"""
Utility functions for the PDF Q&A Backend.
"""

import re
import time
import uuid
import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type, TypeVar
from datetime import datetime, timezone
import logging

import httpx
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from .config import Settings
from .exceptions import PipelineError, ProviderTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

_WHITESPACE_RE = re.compile(r"\s+")


def generate_vector_id() -> str:
    """Generate a unique vector ID."""
    return str(uuid.uuid4())


def format_timestamp() -> str:
    """Get current UTC timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


def normalize_text(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def preview(text: str, limit: int = 200) -> str:
    """Shorten text for log output."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def measure_time(func):
    """Decorator to measure function execution time."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            execution_time = time.time() - start_time
            logger.info(f"{func.__name__} executed in {execution_time:.2f} seconds")
    return wrapper


def log_processing_info(operation: str, details: Dict[str, Any]) -> None:
    """Log processing information."""
    logger.info(f"{operation}: {details}")


def handle_processing_error(operation: str, error: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
    """Handle and log processing errors."""
    error_info = {
        'operation': operation,
        'error_type': type(error).__name__,
        'error_message': str(error),
        'timestamp': format_timestamp()
    }

    if isinstance(error, PipelineError) and error.details:
        error_info.update(error.details)

    if context:
        error_info.update(context)

    logger.error(f"Processing error: {error_info}")
    return error_info


def is_timeout_error(error: BaseException) -> bool:
    """Whether an exception, or anything in its cause chain, is a timeout."""
    current: Optional[BaseException] = error
    depth = 0
    while current is not None and depth < 10:
        if isinstance(current, (TimeoutError, httpx.TimeoutException)):
            return True
        name = type(current).__name__
        if "Timeout" in name or "DeadlineExceeded" in name:
            return True
        current = current.__cause__ or current.__context__
        depth += 1
    return False


def _status_code(error: BaseException) -> Optional[int]:
    # qdrant UnexpectedResponse exposes status_code, google errors expose code
    for attr in ("status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


def is_transient_error(error: BaseException) -> bool:
    """Whether a provider failure is worth retrying (timeouts, transport errors, 429, 5xx)."""
    if is_timeout_error(error):
        return True
    current: Optional[BaseException] = error
    depth = 0
    while current is not None and depth < 10:
        if isinstance(current, (ConnectionError, httpx.TransportError)):
            return True
        status = _status_code(current)
        if status is not None and (status == 429 or 500 <= status < 600):
            return True
        current = current.__cause__ or current.__context__
        depth += 1
    return False


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with exponential backoff for external provider calls."""

    max_attempts: int = 3
    initial_wait: float = 1.0
    max_wait: float = 10.0
    timeout: Optional[float] = None

    @classmethod
    def from_settings(cls, config: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=config.provider_max_attempts,
            initial_wait=config.provider_retry_initial_wait,
            max_wait=config.provider_retry_max_wait,
            timeout=config.provider_timeout_seconds,
        )


def call_provider(
    operation: str,
    func: Callable[..., T],
    *args: Any,
    error_cls: Type[PipelineError],
    policy: RetryPolicy,
    **kwargs: Any,
) -> T:
    """
    Call an external provider with retries and map its failures.

    Args:
        operation: Name used in logs and error messages
        func: Provider callable
        error_cls: Pipeline error raised once retries are exhausted
        policy: Retry policy to apply

    Returns:
        Whatever the provider returned

    Raises:
        ProviderTimeout: If the last attempt timed out
        PipelineError: ``error_cls`` for any other provider failure
    """
    retryer = Retrying(
        retry=retry_if_exception(is_transient_error),
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential_jitter(
            initial=policy.initial_wait,
            max=policy.max_wait,
            jitter=policy.initial_wait,
        ),
        before_sleep=lambda retry_state: logger.warning(
            f"{operation} - Retry {retry_state.attempt_number}/{policy.max_attempts} "
            f"after {type(retry_state.outcome.exception()).__name__}"
        ),
        reraise=True,
    )

    try:
        return retryer(func, *args, **kwargs)
    except Exception as e:
        details = {
            "operation": operation,
            "attempts": retryer.statistics.get("attempt_number", 1),
        }
        if is_timeout_error(e):
            raise ProviderTimeout(operation, policy.timeout, details) from e
        raise error_cls(f"{operation} failed: {e}", details) from e
