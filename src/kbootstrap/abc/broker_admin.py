from collections.abc import Sequence
from typing import Protocol

from ..types import TopicListing, TopicSpec


class BrokerAdminProtocol(Protocol):
    def create_topics(self, specs: Sequence[TopicSpec]) -> None: ...

    def list_topics(self) -> TopicListing: ...
