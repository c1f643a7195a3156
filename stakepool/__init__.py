"""Stake Pool CLI."""
from .core import (
    StakePool,
    DeadlineExceeded,
    StakePoolError,
    Distribution,
    RewardEntry,
    Clock,
    SystemClock,
    ManualClock,
)

__version__ = "0.1.0"
