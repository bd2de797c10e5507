from __future__ import annotations


class ReconcilerError(Exception):
    pass


class ConfigurationError(ReconcilerError):
    pass


class AdminCallFailed(ReconcilerError):
    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class RetryExhausted(ReconcilerError):
    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"gave up after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


class FatalReconcileError(ReconcilerError):
    """aborts the reconciliation; the only recovery is restarting the process"""


class TopicCreationFailed(FatalReconcileError):
    pass


class TopicListingFailed(FatalReconcileError):
    pass


class TopicNotReadyInTime(FatalReconcileError):
    def __init__(self, topic: str, attempts: int) -> None:
        super().__init__(f"topic {topic!r} not visible after {attempts} attempt(s)")
        self.topic = topic
        self.attempts = attempts


class RegistryNotReadyInTime(FatalReconcileError):
    def __init__(self, attempts: int) -> None:
        super().__init__(f"schema registry not healthy after {attempts} attempt(s)")
        self.attempts = attempts


class InterruptedDuringWait(FatalReconcileError):
    pass
