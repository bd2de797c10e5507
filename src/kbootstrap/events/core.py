from __future__ import annotations

from enum import Enum

import msgspec

from ..types import ReconcilerState


class ReconcileEventType(str, Enum):
    UNKNOWN = "unknown"

    STATE_CHANGED = "reconcile.state_changed"
    TOPICS_CREATED = "topics.created"
    TOPIC_VISIBLE = "topic.visible"
    WAIT_RETRY = "wait.retry"
    READY = "reconcile.ready"
    FAILED = "reconcile.failed"


class StateChanged(msgspec.Struct, frozen=True):
    previous: ReconcilerState
    current: ReconcilerState
    timestamp: float

    event_type: ReconcileEventType = ReconcileEventType.STATE_CHANGED


class TopicsCreated(msgspec.Struct, frozen=True):
    topics: tuple[str, ...]
    timestamp: float

    event_type: ReconcileEventType = ReconcileEventType.TOPICS_CREATED


class TopicVisible(msgspec.Struct, frozen=True):
    topic: str
    attempt: int
    timestamp: float

    event_type: ReconcileEventType = ReconcileEventType.TOPIC_VISIBLE


class WaitRetry(msgspec.Struct, frozen=True):
    phase: ReconcilerState
    attempt: int
    delay_ms: float
    timestamp: float
    topic: str | None = None

    event_type: ReconcileEventType = ReconcileEventType.WAIT_RETRY


class ReconcileReady(msgspec.Struct, frozen=True):
    topics: tuple[str, ...]
    duration: float
    timestamp: float

    event_type: ReconcileEventType = ReconcileEventType.READY


class ReconcileFailed(msgspec.Struct, frozen=True):
    phase: ReconcilerState
    error_type: str
    exception: str
    traceback: str
    timestamp: float

    event_type: ReconcileEventType = ReconcileEventType.FAILED


type ReconcileEvent = StateChanged | TopicsCreated | TopicVisible | WaitRetry | ReconcileReady | ReconcileFailed
