"""Retry decorator for handling GitHub API rate limits.

Label stores backed by the GitHub REST API retry primary rate limits a couple
of times and secondary (abuse detection) limits once, honouring the wait time
GitHub asks for. Any other failure propagates immediately so that the
reconciliation engine can record it against the label being processed.
"""

import asyncio
import functools
import time
from typing import Any, Callable, Mapping, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _wait_time_from_headers(headers: Mapping[str, str], fallback: float) -> float:
    """Compute how long to wait from 'retry-after' or 'x-ratelimit-reset' headers."""
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
            return fallback

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
            return fallback
        current_timestamp = int(time.time())
        if reset_timestamp > current_timestamp:
            return float(reset_timestamp - current_timestamp + 1)
    return fallback


def _is_secondary_rate_limit(exc: Exception) -> bool:
    if isinstance(exc, SecondaryRateLimitExceeded):
        return True
    return isinstance(exc, RequestFailed) and exc.response.status_code == 403 and "secondary rate limit" in str(exc).lower()


def _is_rate_limit(exc: Exception) -> bool:
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    if not isinstance(exc, RequestFailed):
        return False
    status_code = exc.response.status_code
    return status_code == 429 or (status_code == 403 and "rate limit" in str(exc).lower())


def retry_on_rate_limit(
    max_retries: int = 2,
    max_secondary_retries: int = 1,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async label store calls that hit GitHub rate limits.

    Args:
        max_retries: Retries allowed for primary rate limits (default: 2)
        max_secondary_retries: Retries allowed for secondary rate limits (default: 1)
        initial_delay: Delay in seconds used when GitHub gives no wait hint (default: 10.0)
        max_delay: Upper bound on any single wait in seconds (default: 300.0)
        exponential_base: Growth factor of the fallback delay between attempts (default: 2.0)

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: F) -> F:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            primary_attempts = 0
            secondary_attempts = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except (RequestFailed, PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as exc:
                    if not _is_rate_limit(exc):
                        raise

                    secondary = _is_secondary_rate_limit(exc)
                    if secondary:
                        secondary_attempts += 1
                        exhausted = secondary_attempts > max_secondary_retries
                    else:
                        primary_attempts += 1
                        exhausted = primary_attempts > max_retries
                    if exhausted:
                        logger.error(
                            "Rate limit retries exhausted",
                            function=func.__name__,
                            rate_limit_type="secondary" if secondary else "primary",
                            error=str(exc),
                        )
                        raise

                    retry_after = getattr(exc, "retry_after", None)
                    if retry_after:
                        wait_time = retry_after.total_seconds()
                    elif isinstance(exc, RequestFailed):
                        wait_time = _wait_time_from_headers(exc.response.headers, delay)
                    else:
                        wait_time = delay
                    wait_time = min(wait_time, max_delay)

                    logger.warning(
                        "Rate limit hit, retrying",
                        function=func.__name__,
                        rate_limit_type="secondary" if secondary else "primary",
                        wait_time=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
