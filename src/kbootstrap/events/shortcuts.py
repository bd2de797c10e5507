from __future__ import annotations

import time
import traceback
from collections.abc import Sequence

from ..types import ReconcilerState
from .core import ReconcileFailed, ReconcileReady, StateChanged, TopicsCreated, TopicVisible, WaitRetry


def _state_changed_event(previous: ReconcilerState, current: ReconcilerState) -> StateChanged:
    return StateChanged(previous=previous, current=current, timestamp=time.time())


def _topics_created_event(topics: Sequence[str]) -> TopicsCreated:
    return TopicsCreated(topics=tuple(topics), timestamp=time.time())


def _topic_visible_event(topic: str, attempt: int) -> TopicVisible:
    return TopicVisible(topic=topic, attempt=attempt, timestamp=time.time())


def _wait_retry_event(phase: ReconcilerState, attempt: int, delay_ms: float, topic: str | None = None) -> WaitRetry:
    return WaitRetry(phase=phase, attempt=attempt, delay_ms=delay_ms, timestamp=time.time(), topic=topic)


def _ready_event(topics: Sequence[str], duration: float) -> ReconcileReady:
    return ReconcileReady(topics=tuple(topics), duration=duration, timestamp=time.time())


def _failure_event(phase: ReconcilerState, exception: BaseException) -> ReconcileFailed:
    return ReconcileFailed(
        phase=phase,
        error_type=type(exception).__name__,
        exception=str(exception),
        traceback="\n".join(traceback.format_exception(exception.__class__, exception, exception.__traceback__)),
        timestamp=time.time(),
    )
