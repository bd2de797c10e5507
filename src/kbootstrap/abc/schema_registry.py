from typing import Protocol


class SchemaRegistryProtocol(Protocol):
    def probe_health(self) -> bool: ...
