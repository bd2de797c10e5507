from .broker_admin import BrokerAdminProtocol
from .schema_registry import SchemaRegistryProtocol
from .sleeper import SleeperProtocol

__all__ = ["BrokerAdminProtocol", "SchemaRegistryProtocol", "SleeperProtocol"]
