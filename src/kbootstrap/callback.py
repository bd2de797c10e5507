"""Hooks for code that must react to the bootstrap outcome, e.g. producers waiting for readiness."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

import msgspec

from .events import (
    ReconcileEvent,
    ReconcileEventType,
    ReconcileFailed,
    ReconcileReady,
    StateChanged,
    TopicsCreated,
    TopicVisible,
    WaitRetry,
)
from .types import ReconcilerState


def event_phase(event: ReconcileEvent) -> ReconcilerState:
    """phase of the reconciliation an event belongs to"""
    match event:
        case StateChanged(current=current):
            return current
        case TopicsCreated():
            return ReconcilerState.CREATING_TOPICS
        case TopicVisible():
            return ReconcilerState.VERIFYING_TOPICS
        case WaitRetry(phase=phase) | ReconcileFailed(phase=phase):
            return phase
        case ReconcileReady():
            return ReconcilerState.READY
        case _:
            raise TypeError(f"unknown event {event!r}")


class CallbackRule(msgspec.Struct, frozen=True, kw_only=True):
    """empty criteria match everything; set criteria must all hold"""

    event_types: frozenset[ReconcileEventType] | None = None
    phases: frozenset[ReconcilerState] | None = None
    topics: frozenset[str] | None = None

    def matches(self, event: ReconcileEvent) -> bool:
        if self.event_types and event.event_type not in self.event_types:
            return False

        if self.phases and event_phase(event) not in self.phases:
            return False

        # events without a topic never satisfy a topic filter
        return not self.topics or getattr(event, "topic", None) in self.topics


class Callback(ABC):
    rules: tuple[CallbackRule, ...] = ()

    def __init__(self) -> None:
        self.rules = tuple(type(self).rules)

    def add_rule(self, rule: CallbackRule) -> None:
        self.rules = (*self.rules, rule)

    def should_handle(self, event: ReconcileEvent) -> bool:
        if not self.rules:
            return True

        return any(rule.matches(event) for rule in self.rules)

    @abstractmethod
    def handle(self, event: ReconcileEvent) -> None: ...


class ReadinessLatch(Callback):
    """
    lets producer/consumer threads block until reconciliation has ended

    `wait` returns True once the cluster is ready, False on failure or timeout;
    the failure event stays available in `failure`
    """

    rules = (CallbackRule(event_types=frozenset({ReconcileEventType.READY, ReconcileEventType.FAILED})),)

    def __init__(self) -> None:
        super().__init__()
        self._finished = threading.Event()
        self.ready: ReconcileReady | None = None
        self.failure: ReconcileFailed | None = None

    def handle(self, event: ReconcileEvent) -> None:
        match event:
            case ReconcileReady():
                self.ready = event
            case ReconcileFailed():
                self.failure = event
            case _:
                return
        self._finished.set()

    @property
    def finished(self) -> bool:
        return self._finished.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        if not self._finished.wait(timeout):
            return False
        return self.ready is not None
