"""Startup configuration: an optional TOML file plus environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import msgspec
from loguru import logger

from .exceptions import ConfigurationError
from .retry import RetryPolicy, WaitPolicy
from .types import TopicSpec

ENV_BOOTSTRAP_SERVERS = "KAFKA_BOOTSTRAP_SERVERS"
ENV_SCHEMA_REGISTRY_URL = "SCHEMA_REGISTRY_URL"
ENV_TOPICS = "KBOOTSTRAP_TOPICS"
ENV_LOG_LEVEL = "KBOOTSTRAP_LOG_LEVEL"


class ReconcilerConfig(msgspec.Struct, frozen=True, kw_only=True):
    bootstrap_servers: str = "localhost:9092"
    schema_registry_url: str = "http://localhost:8081"
    schema_registry_health_path: str = "/"
    request_timeout_s: float = 10.0
    log_level: str = "INFO"

    topics: tuple[TopicSpec, ...] = ()
    # shorthand: one partition/replication setting shared by every name
    topic_names: tuple[str, ...] = ()
    num_of_partitions: int = 3
    replication_factor: int = 1

    retry: RetryPolicy = msgspec.field(default_factory=RetryPolicy)
    wait: WaitPolicy | None = None
    admin_config: dict[str, str] = {}

    def __post_init__(self) -> None:
        if self.request_timeout_s <= 0:
            raise ValueError(f"request_timeout_s must be positive, got {self.request_timeout_s}")

    def topic_specs(self) -> list[TopicSpec]:
        specs: dict[str, TopicSpec] = {}
        for spec in self.topics:
            specs.setdefault(spec.name, spec)

        for raw in self.topic_names:
            name = raw.strip()
            if not name:
                continue
            specs.setdefault(
                name,
                TopicSpec(name=name, partition_count=self.num_of_partitions, replication_factor=self.replication_factor),
            )

        return list(specs.values())

    def wait_policy(self) -> WaitPolicy:
        return self.wait or WaitPolicy.from_retry_policy(self.retry)


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if value := environ.get(ENV_BOOTSTRAP_SERVERS):
        overrides["bootstrap_servers"] = value
    if value := environ.get(ENV_SCHEMA_REGISTRY_URL):
        overrides["schema_registry_url"] = value
    if value := environ.get(ENV_TOPICS):
        overrides["topic_names"] = [name for name in value.split(",") if name.strip()]
    if value := environ.get(ENV_LOG_LEVEL):
        overrides["log_level"] = value.upper()
    return overrides


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> ReconcilerConfig:
    environ = os.environ if environ is None else environ

    data: dict[str, Any] = {}
    if path is not None:
        try:
            data = msgspec.toml.decode(Path(path).read_bytes(), type=dict[str, Any])
        except OSError as e:
            raise ConfigurationError(f"cannot read config file {path}: {e}") from e
        except msgspec.DecodeError as e:
            raise ConfigurationError(f"invalid config file {path}: {e}") from e

    overrides = _env_overrides(environ)
    if overrides:
        logger.debug("config overridden from environment: {}", sorted(overrides))
    data.update(overrides)

    try:
        return msgspec.convert(data, type=ReconcilerConfig)
    except msgspec.ValidationError as e:
        raise ConfigurationError(f"invalid configuration: {e}") from e
