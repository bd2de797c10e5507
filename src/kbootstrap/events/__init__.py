from .core import (
    ReconcileEvent,
    ReconcileEventType,
    ReconcileFailed,
    ReconcileReady,
    StateChanged,
    TopicsCreated,
    TopicVisible,
    WaitRetry,
)
from .shortcuts import (
    _failure_event,
    _ready_event,
    _state_changed_event,
    _topic_visible_event,
    _topics_created_event,
    _wait_retry_event,
)

__all__ = [
    "ReconcileEvent",
    "ReconcileEventType",
    "ReconcileFailed",
    "ReconcileReady",
    "StateChanged",
    "TopicsCreated",
    "TopicVisible",
    "WaitRetry",
    "_failure_event",
    "_ready_event",
    "_state_changed_event",
    "_topic_visible_event",
    "_topics_created_event",
    "_wait_retry_event",
]
