from __future__ import annotations

import threading

from loguru import logger

from ..exceptions import InterruptedDuringWait


class InterruptibleSleeper:
    """
    blocking sleep on the calling thread that a shutdown signal can cut short

    once interrupted, every later `sleep` fails immediately as well
    """

    def __init__(self) -> None:
        self._interrupted = threading.Event()

    @property
    def interrupted(self) -> bool:
        return self._interrupted.is_set()

    def interrupt(self) -> None:
        logger.debug("sleeper interrupted")
        self._interrupted.set()

    def sleep(self, delay_ms: float) -> None:
        try:
            if self._interrupted.wait(delay_ms / 1000):
                raise InterruptedDuringWait(f"interrupted while waiting {delay_ms} ms")
        except KeyboardInterrupt as e:
            self._interrupted.set()
            raise InterruptedDuringWait(f"interrupted while waiting {delay_ms} ms") from e
