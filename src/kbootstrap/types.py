from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Self

import msgspec
from loguru import logger

if TYPE_CHECKING:
    from .abc.sleeper import SleeperProtocol
    from .retry import WaitPolicy


type TopicListing = frozenset[str]


class ReconcilerState(StrEnum):
    IDLE = "idle"
    CREATING_TOPICS = "creating_topics"
    VERIFYING_TOPICS = "verifying_topics"
    VERIFYING_REGISTRY = "verifying_registry"
    READY = "ready"
    FAILED = "failed"


class TopicSpec(msgspec.Struct, frozen=True, kw_only=True):
    name: str
    partition_count: int = 1
    replication_factor: int = 1

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("topic name must not be empty")
        if self.partition_count < 1:
            raise ValueError(f"partition_count must be positive, got {self.partition_count}")
        if self.replication_factor < 1:
            raise ValueError(f"replication_factor must be positive, got {self.replication_factor}")


class PollState(msgspec.Struct):
    """
    progress of one wait-for-observable-state loop

    owned by a single verification phase; the topic phase threads one
    instance through every declared topic so they all share one budget
    """

    current_sleep_ms: float
    attempt: int = 1

    @classmethod
    def start(cls, policy: WaitPolicy) -> Self:
        return cls(current_sleep_ms=policy.sleep_ms)

    def advance(self, policy: WaitPolicy, sleeper: SleeperProtocol) -> bool:
        """
        consume one attempt of the budget

        `return:` False once the budget is spent, otherwise sleeps the
        current interval, grows it by the multiplier (uncapped) and
        returns True
        """

        self.attempt += 1
        if self.attempt > policy.max_attempts:
            return False

        logger.debug("waiting {} ms before attempt {}", self.current_sleep_ms, self.attempt)
        sleeper.sleep(self.current_sleep_ms)
        self.current_sleep_ms *= policy.multiplier
        return True
