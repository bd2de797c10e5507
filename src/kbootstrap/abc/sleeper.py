from typing import Protocol


class SleeperProtocol(Protocol):
    @property
    def interrupted(self) -> bool: ...

    def sleep(self, delay_ms: float) -> None: ...
