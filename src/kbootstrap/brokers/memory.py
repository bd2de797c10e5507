import threading
from collections.abc import Iterable, Sequence

from loguru import logger

from ..types import TopicListing, TopicSpec


class InMemoryBrokerAdmin:
    """

    broker admin kept in process memory

    `visibility_delay` models eventual consistency: a newly created topic
    stays out of that many listings before it shows up

    """

    def __init__(self, existing: Iterable[str] = (), visibility_delay: int = 0) -> None:
        self._topics: dict[str, TopicSpec] = {name: TopicSpec(name=name) for name in existing}
        self._pending: dict[str, tuple[TopicSpec, int]] = {}
        self._lock = threading.Lock()
        self.visibility_delay = visibility_delay
        self.create_calls = 0
        self.list_calls = 0

    def create_topics(self, specs: Sequence[TopicSpec]) -> None:
        with self._lock:
            self.create_calls += 1
            for spec in specs:
                if spec.name in self._topics or spec.name in self._pending:
                    logger.debug("topic {} already exists", spec.name)
                    continue
                if self.visibility_delay > 0:
                    self._pending[spec.name] = (spec, self.visibility_delay)
                else:
                    self._topics[spec.name] = spec
                logger.debug("topic {} created", spec.name)

    def list_topics(self) -> TopicListing:
        with self._lock:
            self.list_calls += 1
            listing = frozenset(self._topics)

            for name, (spec, remaining) in list(self._pending.items()):
                if remaining <= 1:
                    del self._pending[name]
                    self._topics[name] = spec
                else:
                    self._pending[name] = (spec, remaining - 1)

            return listing

    def describe_topic(self, name: str) -> TopicSpec | None:
        with self._lock:
            if name in self._topics:
                return self._topics[name]
            pending = self._pending.get(name)
            return pending[0] if pending else None
