from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Self

import msgspec
from loguru import logger

from .exceptions import InterruptedDuringWait, RetryExhausted

if TYPE_CHECKING:
    from .abc.sleeper import SleeperProtocol


class RetryPolicy(msgspec.Struct, frozen=True, kw_only=True):
    """
    capped exponential backoff for single remote calls that raise on failure
    """

    initial_interval_ms: int = 1000
    max_interval_ms: int = 10000
    multiplier: float = 2.0
    max_attempts: int = 3

    def __post_init__(self) -> None:
        if self.initial_interval_ms < 1 or self.max_interval_ms < 1:
            raise ValueError("retry intervals must be positive")
        if self.initial_interval_ms > self.max_interval_ms:
            raise ValueError(
                f"initial_interval_ms ({self.initial_interval_ms}) exceeds max_interval_ms ({self.max_interval_ms})"
            )
        if self.multiplier < 1:
            raise ValueError(f"multiplier must be >= 1, got {self.multiplier}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")

    def get_delay(self, attempt: int) -> float:
        """delay slept after the failed `attempt` (1-based)"""
        return min(self.initial_interval_ms * self.multiplier ** (attempt - 1), self.max_interval_ms)

    def execute[T](self, operation: Callable[[], T], sleeper: SleeperProtocol, name: str = "operation") -> T:
        attempt = 1
        while True:
            try:
                return operation()
            except InterruptedDuringWait:
                raise
            except Exception as e:
                if attempt >= self.max_attempts:
                    logger.warning("{} failed on attempt {}/{}, giving up: {}", name, attempt, self.max_attempts, e)
                    raise RetryExhausted(attempt, e) from e

                delay = self.get_delay(attempt)
                logger.warning(
                    "{} failed on attempt {}/{}, retrying in {} ms: {}", name, attempt, self.max_attempts, delay, e
                )
                sleeper.sleep(delay)
                attempt += 1


class WaitPolicy(msgspec.Struct, frozen=True, kw_only=True):
    """
    uncapped exponential backoff for loops waiting on eventually consistent state
    """

    sleep_ms: int = 2000
    multiplier: float = 2.0
    max_attempts: int = 3

    def __post_init__(self) -> None:
        if self.sleep_ms < 1:
            raise ValueError(f"sleep_ms must be positive, got {self.sleep_ms}")
        if self.multiplier < 1:
            raise ValueError(f"multiplier must be >= 1, got {self.multiplier}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")

    @classmethod
    def from_retry_policy(cls, policy: RetryPolicy) -> Self:
        return cls(sleep_ms=policy.initial_interval_ms, multiplier=policy.multiplier, max_attempts=policy.max_attempts)
