from __future__ import annotations

import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import loguru

from .brokers.kafka import KafkaBrokerAdmin
from .config import ReconcilerConfig
from .event_router import EventRouter
from .reconciler import TopicReconciler
from .registries.http import HttpSchemaRegistry
from .utils.sleep import InterruptibleSleeper

logger = loguru.logger.bind(name="kbootstrap.bootstrap")


def configure_logging(level: str = "INFO") -> None:
    loguru.logger.remove()
    loguru.logger.add(sys.stderr, level=level.upper())


@contextmanager
def interrupt_on_signals(sleeper: InterruptibleSleeper) -> Iterator[None]:
    """
    route SIGINT/SIGTERM to `sleeper` for the duration of the block

    handlers can only be installed from the main thread; elsewhere this is a no-op
    """

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handle_signal(signum: int, _frame: object) -> None:
        logger.info("rcvd signal {}, interrupting reconciliation...", signal.Signals(signum).name)
        sleeper.interrupt()

    previous = {sig: signal.signal(sig, handle_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def build_reconciler(
    config: ReconcilerConfig,
    sleeper: InterruptibleSleeper | None = None,
    event_router: EventRouter | None = None,
) -> tuple[TopicReconciler, HttpSchemaRegistry]:
    admin = KafkaBrokerAdmin(
        bootstrap_servers=config.bootstrap_servers,
        request_timeout=config.request_timeout_s,
        client_config=config.admin_config,
    )
    registry = HttpSchemaRegistry(
        base_url=config.schema_registry_url,
        health_path=config.schema_registry_health_path,
        timeout=config.request_timeout_s,
    )
    reconciler = TopicReconciler(
        admin,
        registry,
        config.topic_specs(),
        retry_policy=config.retry,
        wait_policy=config.wait_policy(),
        sleeper=sleeper or InterruptibleSleeper(),
        event_router=event_router,
    )
    return reconciler, registry


def run(config: ReconcilerConfig, event_router: EventRouter | None = None) -> None:
    """blocks until the cluster is ready; raises a FatalReconcileError otherwise"""
    configure_logging(config.log_level)

    logger.info("=" * 60 + "\n" + "kbootstrap starting..." + "\n" + "=" * 60)
    logger.info("bootstrap servers: {}", config.bootstrap_servers)
    logger.info("schema registry: {}", config.schema_registry_url)

    sleeper = InterruptibleSleeper()
    reconciler, registry = build_reconciler(config, sleeper=sleeper, event_router=event_router)
    logger.info("topics: {}", ", ".join(reconciler.topic_names) or "<none>")

    with registry, interrupt_on_signals(sleeper):
        reconciler.ensure_ready()
