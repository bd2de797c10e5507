from .bootstrap import build_reconciler, configure_logging, run
from .brokers import InMemoryBrokerAdmin, KafkaBrokerAdmin
from .callback import Callback, CallbackRule, ReadinessLatch, event_phase
from .config import ReconcilerConfig, load_config
from .event_router import EventRouter
from .exceptions import (
    AdminCallFailed,
    ConfigurationError,
    FatalReconcileError,
    InterruptedDuringWait,
    ReconcilerError,
    RegistryNotReadyInTime,
    RetryExhausted,
    TopicCreationFailed,
    TopicListingFailed,
    TopicNotReadyInTime,
)
from .reconciler import TopicReconciler
from .registries import HttpSchemaRegistry, InMemorySchemaRegistry
from .retry import RetryPolicy, WaitPolicy
from .types import PollState, ReconcilerState, TopicSpec
from .utils import InterruptibleSleeper

__all__ = [
    "TopicReconciler",
    "ReconcilerState",
    "ReconcilerConfig",
    "load_config",
    "TopicSpec",
    "PollState",
    "RetryPolicy",
    "WaitPolicy",
    "KafkaBrokerAdmin",
    "InMemoryBrokerAdmin",
    "HttpSchemaRegistry",
    "InMemorySchemaRegistry",
    "InterruptibleSleeper",
    "EventRouter",
    "Callback",
    "CallbackRule",
    "ReadinessLatch",
    "event_phase",
    "build_reconciler",
    "configure_logging",
    "run",
    "ReconcilerError",
    "ConfigurationError",
    "AdminCallFailed",
    "RetryExhausted",
    "FatalReconcileError",
    "TopicCreationFailed",
    "TopicListingFailed",
    "TopicNotReadyInTime",
    "RegistryNotReadyInTime",
    "InterruptedDuringWait",
]
