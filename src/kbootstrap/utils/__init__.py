from .sleep import InterruptibleSleeper

__all__ = ["InterruptibleSleeper"]
