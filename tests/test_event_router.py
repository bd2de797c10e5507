from __future__ import annotations

import threading

from kbootstrap.callback import Callback, CallbackRule, ReadinessLatch, event_phase
from kbootstrap.event_router import EventRouter
from kbootstrap.events import ReconcileEventType
from kbootstrap.events.core import ReconcileFailed, ReconcileReady, StateChanged, TopicsCreated, TopicVisible, WaitRetry
from kbootstrap.types import ReconcilerState


def _visible(topic: str) -> TopicVisible:
	return TopicVisible(topic=topic, attempt=1, timestamp=1.0)


def _failed() -> ReconcileFailed:
	return ReconcileFailed(
		phase=ReconcilerState.CREATING_TOPICS, error_type="TopicCreationFailed", exception="boom", traceback="", timestamp=1.0
	)


def test_emit_routes_to_callback():
	router = EventRouter()
	received = []

	class TestCallback(Callback):
		def handle(self, event):
			received.append(event)

	router.register_callback(TestCallback())
	router.emit(StateChanged(previous=ReconcilerState.IDLE, current=ReconcilerState.CREATING_TOPICS, timestamp=1.0))

	assert len(received) == 1
	assert received[0].current == ReconcilerState.CREATING_TOPICS


def test_callback_with_rule_filters_event_types():
	router = EventRouter()
	received = []

	class FilteredCallback(Callback):
		def __init__(self):
			super().__init__()
			self.add_rule(CallbackRule(event_types=frozenset({ReconcileEventType.TOPIC_VISIBLE})))

		def handle(self, event):
			received.append(event)

	router.register_callback(FilteredCallback())

	router.emit(StateChanged(previous=ReconcilerState.IDLE, current=ReconcilerState.CREATING_TOPICS, timestamp=1.0))
	assert received == []

	router.emit(_visible("events"))
	assert len(received) == 1


def test_rule_filters_by_topic():
	rule = CallbackRule(topics=frozenset({"audit"}))
	assert rule.matches(_visible("audit")) is True
	assert rule.matches(_visible("events")) is False
	# events without a topic never match a topic rule
	assert rule.matches(_failed()) is False


def test_failing_callback_does_not_stop_others():
	router = EventRouter()
	received = []

	class Broken(Callback):
		def handle(self, event):
			raise RuntimeError("callback bug")

	class Working(Callback):
		def handle(self, event):
			received.append(event)

	router.register_callback(Broken())
	router.register_callback(Working())

	router.emit(_visible("events"))

	assert len(received) == 1


def test_unregister_callback():
	router = EventRouter()
	received = []

	class TestCallback(Callback):
		def handle(self, event):
			received.append(event)

	callback = TestCallback()
	router.register_callback(callback)
	router.unregister_callback(callback)
	router.emit(_visible("events"))

	assert received == []
	assert router.callbacks == ()


def _ready() -> ReconcileReady:
	return ReconcileReady(topics=("events",), duration=0.5, timestamp=1.0)


def test_event_phase():
	assert event_phase(StateChanged(previous=ReconcilerState.IDLE, current=ReconcilerState.CREATING_TOPICS, timestamp=1.0)) == ReconcilerState.CREATING_TOPICS
	assert event_phase(TopicsCreated(topics=("events",), timestamp=1.0)) == ReconcilerState.CREATING_TOPICS
	assert event_phase(_visible("events")) == ReconcilerState.VERIFYING_TOPICS
	assert event_phase(
		WaitRetry(phase=ReconcilerState.VERIFYING_REGISTRY, attempt=2, delay_ms=100, timestamp=1.0)
	) == ReconcilerState.VERIFYING_REGISTRY
	assert event_phase(_failed()) == ReconcilerState.CREATING_TOPICS
	assert event_phase(_ready()) == ReconcilerState.READY


def test_rule_filters_by_phase():
	rule = CallbackRule(phases=frozenset({ReconcilerState.VERIFYING_TOPICS}))
	assert rule.matches(_visible("events")) is True
	assert rule.matches(_failed()) is False
	assert rule.matches(
		WaitRetry(phase=ReconcilerState.VERIFYING_TOPICS, attempt=2, delay_ms=100, timestamp=1.0, topic="audit")
	) is True


def test_rule_criteria_must_all_hold():
	rule = CallbackRule(
		event_types=frozenset({ReconcileEventType.WAIT_RETRY}),
		phases=frozenset({ReconcilerState.VERIFYING_TOPICS}),
		topics=frozenset({"audit"}),
	)
	assert rule.matches(
		WaitRetry(phase=ReconcilerState.VERIFYING_TOPICS, attempt=2, delay_ms=100, timestamp=1.0, topic="audit")
	) is True
	assert rule.matches(
		WaitRetry(phase=ReconcilerState.VERIFYING_TOPICS, attempt=2, delay_ms=100, timestamp=1.0, topic="events")
	) is False
	assert rule.matches(_visible("audit")) is False


def test_class_level_rules_are_per_instance():
	class FailureCallback(Callback):
		rules = (CallbackRule(event_types=frozenset({ReconcileEventType.FAILED})),)

		def handle(self, event):
			pass

	first = FailureCallback()
	second = FailureCallback()
	first.add_rule(CallbackRule(topics=frozenset({"events"})))

	assert first.should_handle(_visible("events")) is True
	assert second.should_handle(_visible("events")) is False
	assert second.should_handle(_failed()) is True
	assert FailureCallback.rules == (CallbackRule(event_types=frozenset({ReconcileEventType.FAILED})),)


class TestReadinessLatch:
	def test_ignores_progress_events(self):
		latch = ReadinessLatch()
		router = EventRouter()
		router.register_callback(latch)

		router.emit(_visible("events"))

		assert latch.finished is False
		assert latch.wait(timeout=0) is False

	def test_ready_releases_waiters(self):
		latch = ReadinessLatch()
		router = EventRouter()
		router.register_callback(latch)
		results = []

		waiter = threading.Thread(target=lambda: results.append(latch.wait(timeout=5)))
		waiter.start()
		router.emit(_ready())
		waiter.join(timeout=5)

		assert results == [True]
		assert latch.ready == _ready()
		assert latch.failure is None

	def test_failure_releases_waiters_with_false(self):
		latch = ReadinessLatch()
		router = EventRouter()
		router.register_callback(latch)

		router.emit(_failed())

		assert latch.finished is True
		assert latch.wait(timeout=0) is False
		assert latch.failure.error_type == "TopicCreationFailed"
