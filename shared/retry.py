"""
Opt-in retry policy for transport failures.

The dispatcher never retries transport errors on its own; callers that want
it configure a RetryConfig explicitly.
"""

import asyncio
import random
from typing import Any, Callable, Awaitable, Optional

from shared.logging import get_logger


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(self,
                 max_attempts: int = 3,
                 base_delay: float = 1.0,
                 max_delay: float = 60.0,
                 exponential_base: float = 2.0,
                 jitter: bool = True,
                 backoff_strategy: str = "exponential"):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.backoff_strategy = backoff_strategy


class RetryError(Exception):
    """Exception raised when all retry attempts are exhausted."""
    def __init__(self, message: str, last_exception: Exception, attempts: int):
        super().__init__(message)
        self.last_exception = last_exception
        self.attempts = attempts


async def call_with_retry(func: Callable[[], Awaitable[Any]],
                          exceptions: tuple,
                          config: RetryConfig,
                          name: Optional[str] = None,
                          sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep) -> Any:
    """Await ``func()`` and retry on ``exceptions`` according to ``config``."""
    name = name or getattr(func, "__name__", "call")
    logger = get_logger(f"retry.{name}")

    for attempt in range(1, config.max_attempts + 1):
        try:
            result = await func()
        except exceptions as e:
            if attempt == config.max_attempts:
                logger.error(
                    "All retry attempts exhausted",
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    function=name,
                    error=str(e)
                )
                raise RetryError(
                    f"{name} failed after {config.max_attempts} attempts",
                    last_exception=e,
                    attempts=config.max_attempts
                ) from e

            delay = calculate_delay(attempt, config)
            logger.warning(
                "Retry attempt failed, waiting before next attempt",
                attempt=attempt,
                delay=delay,
                function=name,
                error=str(e)
            )
            await sleep(delay)
        else:
            if attempt > 1:
                logger.info("Retry succeeded", attempt=attempt, function=name)
            return result


def retry_on_exception(exceptions: tuple = (Exception,),
                       config: Optional[RetryConfig] = None) -> Callable:
    """Decorator for retrying async functions on exceptions."""

    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        async def wrapper(*args, **kwargs) -> Any:
            return await call_with_retry(
                lambda: func(*args, **kwargs),
                exceptions,
                config,
                name=func.__name__
            )

        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper

    return decorator


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay between retry attempts."""
    if config.backoff_strategy == "exponential":
        delay = config.base_delay * (config.exponential_base ** (attempt - 1))
    elif config.backoff_strategy == "linear":
        delay = config.base_delay * attempt
    else:
        delay = config.base_delay

    delay = min(delay, config.max_delay)

    if config.jitter:
        jitter_amount = delay * 0.1  # 10% jitter
        delay += random.uniform(-jitter_amount, jitter_amount)

    return max(0.0, delay)
