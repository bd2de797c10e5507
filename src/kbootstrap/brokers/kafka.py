from __future__ import annotations

from collections.abc import Mapping, Sequence

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic
from loguru import logger

from ..exceptions import AdminCallFailed
from ..types import TopicListing, TopicSpec


class KafkaBrokerAdmin:
    """

    broker admin backed by confluent-kafka's AdminClient

    every call blocks until the broker answers or `request_timeout` runs out

    """

    def __init__(
        self,
        bootstrap_servers: str = "localhost:9092",
        request_timeout: float = 10.0,
        client_config: Mapping[str, str] | None = None,
        admin_client: AdminClient | None = None,
    ) -> None:
        self.bootstrap_servers = bootstrap_servers
        self.request_timeout = request_timeout
        self._admin = admin_client or AdminClient({**(client_config or {}), "bootstrap.servers": bootstrap_servers})

    def create_topics(self, specs: Sequence[TopicSpec]) -> None:
        new_topics = [
            NewTopic(spec.name, num_partitions=spec.partition_count, replication_factor=spec.replication_factor)
            for spec in specs
        ]
        try:
            futures = self._admin.create_topics(
                new_topics, operation_timeout=self.request_timeout, request_timeout=self.request_timeout
            )
        except (KafkaException, ValueError) as e:
            raise AdminCallFailed("create_topics", str(e)) from e

        for name, future in futures.items():
            try:
                future.result(timeout=self.request_timeout)
                logger.info("topic {} created", name)
            except KafkaException as e:
                error = e.args[0] if e.args else None
                if isinstance(error, KafkaError) and error.code() == KafkaError.TOPIC_ALREADY_EXISTS:
                    logger.info("topic {} already exists", name)
                    continue
                raise AdminCallFailed("create_topics", f"topic {name}: {e}") from e
            except TimeoutError as e:
                raise AdminCallFailed("create_topics", f"topic {name}: timed out") from e

    def list_topics(self) -> TopicListing:
        try:
            metadata = self._admin.list_topics(timeout=self.request_timeout)
        except KafkaException as e:
            raise AdminCallFailed("list_topics", str(e)) from e

        return frozenset(metadata.topics)
