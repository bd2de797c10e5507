from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .events import ReconcileEvent

if TYPE_CHECKING:
    from .callback import Callback


class EventRouter:
    """
    synchronous fan-out of reconcile events to registered callbacks

    callbacks run on the reconciling thread in registration order; a
    callback that raises is logged and skipped
    """

    def __init__(self) -> None:
        self._callbacks: list[Callback] = []

    @property
    def callbacks(self) -> tuple[Callback, ...]:
        return tuple(self._callbacks)

    def register_callback(self, callback: Callback) -> None:
        self._callbacks.append(callback)

    def unregister_callback(self, callback: Callback) -> None:
        self._callbacks.remove(callback)

    def emit(self, event: ReconcileEvent) -> None:
        for callback in self._callbacks:
            if not callback.should_handle(event):
                continue
            try:
                callback.handle(event)
            except Exception as e:
                logger.opt(exception=e).warning(
                    "callback {} failed on {}: {}", type(callback).__name__, event.event_type.value, e
                )
