from __future__ import annotations

import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger

from .event_router import EventRouter
from .events import (
    ReconcileEvent,
    _failure_event,
    _ready_event,
    _state_changed_event,
    _topic_visible_event,
    _topics_created_event,
    _wait_retry_event,
)
from .exceptions import (
    InterruptedDuringWait,
    RegistryNotReadyInTime,
    RetryExhausted,
    TopicCreationFailed,
    TopicListingFailed,
    TopicNotReadyInTime,
)
from .retry import RetryPolicy, WaitPolicy
from .types import PollState, ReconcilerState, TopicListing, TopicSpec
from .utils.sleep import InterruptibleSleeper

if TYPE_CHECKING:
    from .abc.broker_admin import BrokerAdminProtocol
    from .abc.schema_registry import SchemaRegistryProtocol
    from .abc.sleeper import SleeperProtocol


class TopicReconciler:
    """

    makes sure declared topics exist and the schema registry is up
    before any producer or consumer starts

    phases run strictly in order on the calling thread:
    creating_topics -> verifying_topics -> verifying_registry -> ready,
    any fatal error moves to failed and is re-raised

    """

    def __init__(
        self,
        admin: BrokerAdminProtocol,
        registry: SchemaRegistryProtocol,
        topics: Sequence[TopicSpec],
        retry_policy: RetryPolicy | None = None,
        wait_policy: WaitPolicy | None = None,
        sleeper: SleeperProtocol | None = None,
        event_router: EventRouter | None = None,
    ) -> None:
        self.admin = admin
        self.registry = registry
        self.topics: tuple[TopicSpec, ...] = tuple(topics)
        self.retry_policy = retry_policy or RetryPolicy()
        self.wait_policy = wait_policy or WaitPolicy.from_retry_policy(self.retry_policy)
        self.sleeper: SleeperProtocol = sleeper or InterruptibleSleeper()
        self.event_router = event_router or EventRouter()
        self._state = ReconcilerState.IDLE

    @property
    def state(self) -> ReconcilerState:
        return self._state

    @property
    def topic_names(self) -> list[str]:
        return [spec.name for spec in self.topics]

    def ensure_ready(self) -> None:
        if self._state == ReconcilerState.READY:
            logger.info("reconciler already ready, nothing to do")
            return
        if self._state != ReconcilerState.IDLE:
            raise RuntimeError(f"reconciler cannot run from state {self._state.value}")

        started = time.monotonic()
        try:
            if self.topics:
                self._transition(ReconcilerState.CREATING_TOPICS)
                self.create_topics()

                self._transition(ReconcilerState.VERIFYING_TOPICS)
                self.verify_topics(PollState.start(self.wait_policy))
            else:
                logger.info("no topics declared, skipping topic creation")

            self._transition(ReconcilerState.VERIFYING_REGISTRY)
            self.verify_registry(PollState.start(self.wait_policy))

            self._transition(ReconcilerState.READY)
        except KeyboardInterrupt as e:
            error = InterruptedDuringWait(f"interrupted while {self._state.value}")
            self._fail(error)
            raise error from e
        except Exception as e:
            self._fail(e)
            raise

        duration = time.monotonic() - started
        logger.info("topics {} ready after {:.3f}s ...", self.topic_names, duration)
        self._emit(_ready_event(self.topic_names, duration))

    def create_topics(self) -> None:
        names = self.topic_names
        logger.info("creating {} topics: {}", len(names), names)
        try:
            self.retry_policy.execute(lambda: self.admin.create_topics(self.topics), self.sleeper, name="create topics")
        except RetryExhausted as e:
            raise TopicCreationFailed(f"max number of retries reached for creating topics {names}") from e

        logger.info("create topics request accepted for {}", names)
        self._emit(_topics_created_event(names))

    def list_topics(self) -> TopicListing:
        try:
            listing = self.retry_policy.execute(self.admin.list_topics, self.sleeper, name="list topics")
        except RetryExhausted as e:
            raise TopicListingFailed("max number of retries reached for reading topics") from e

        logger.debug("broker reports {} topics: {}", len(listing), sorted(listing))
        return listing

    def verify_topics(self, poll: PollState) -> PollState:
        """
        block until every declared topic shows up in a topic listing

        `poll` is shared by all topics, so the whole phase is bounded by a
        single `wait_policy.max_attempts` budget rather than one per topic

        `return:` the same poll state, advanced
        """

        listing = self.list_topics()
        for spec in self.topics:
            while spec.name not in listing:
                delay = poll.current_sleep_ms
                logger.warning(
                    "topic {} not visible yet, attempt {}/{}", spec.name, poll.attempt, self.wait_policy.max_attempts
                )
                if not poll.advance(self.wait_policy, self.sleeper):
                    raise TopicNotReadyInTime(spec.name, poll.attempt - 1)

                self._emit(_wait_retry_event(ReconcilerState.VERIFYING_TOPICS, poll.attempt, delay, topic=spec.name))
                listing = self.list_topics()

            logger.info("topic {} visible, attempt {}", spec.name, poll.attempt)
            self._emit(_topic_visible_event(spec.name, poll.attempt))

        return poll

    def verify_registry(self, poll: PollState) -> PollState:
        while not self.registry.probe_health():
            delay = poll.current_sleep_ms
            logger.warning("schema registry not healthy yet, attempt {}/{}", poll.attempt, self.wait_policy.max_attempts)
            if not poll.advance(self.wait_policy, self.sleeper):
                raise RegistryNotReadyInTime(poll.attempt - 1)

            self._emit(_wait_retry_event(ReconcilerState.VERIFYING_REGISTRY, poll.attempt, delay))

        logger.info("schema registry healthy, attempt {}", poll.attempt)
        return poll

    def _fail(self, error: Exception) -> None:
        phase = self._state
        logger.error("reconciliation failed while {}: {}", phase.value, error)
        self._transition(ReconcilerState.FAILED)
        self._emit(_failure_event(phase, error))

    def _transition(self, state: ReconcilerState) -> None:
        # a shutdown signal may land during a port call, when nothing is sleeping
        if state != ReconcilerState.FAILED and self.sleeper.interrupted:
            raise InterruptedDuringWait(f"shutdown requested before {state.value}")

        previous, self._state = self._state, state
        logger.info("reconciler state {} -> {}", previous.value, state.value)
        self._emit(_state_changed_event(previous, state))

    def _emit(self, event: ReconcileEvent) -> None:
        self.event_router.emit(event)
