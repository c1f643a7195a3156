"""Core staking ledger for Stake Pool."""
from .clock import Clock, SystemClock, ManualClock
from .errors import StakePoolError, DeadlineExceeded
from .stake import StakeRecord, UINT64_MAX
from .distribution import Distribution, RewardEntry
from .pool import StakePool, ENROLLMENT_WINDOW
from .config import PoolConfig, load_config, configure_logging

__all__ = [
    "Clock",
    "SystemClock",
    "ManualClock",
    "StakePoolError",
    "DeadlineExceeded",
    "StakeRecord",
    "UINT64_MAX",
    "Distribution",
    "RewardEntry",
    "StakePool",
    "ENROLLMENT_WINDOW",
    "PoolConfig",
    "load_config",
    "configure_logging",
]
