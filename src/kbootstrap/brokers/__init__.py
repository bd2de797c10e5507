from .kafka import KafkaBrokerAdmin
from .memory import InMemoryBrokerAdmin

__all__ = ["InMemoryBrokerAdmin", "KafkaBrokerAdmin"]
