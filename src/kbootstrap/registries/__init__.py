from .http import HttpSchemaRegistry
from .memory import InMemorySchemaRegistry

__all__ = ["HttpSchemaRegistry", "InMemorySchemaRegistry"]
