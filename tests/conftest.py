"""Test configuration and fixtures for Stake Pool."""
import sys
import pytest
from datetime import datetime, timezone
from loguru import logger
from stakepool.core.clock import ManualClock
from stakepool.core.pool import StakePool

@pytest.fixture
def start_time():
    """Fixed pool creation instant."""
    return datetime(2024, 2, 1, tzinfo=timezone.utc)

@pytest.fixture
def clock(start_time):
    """Create a manual clock at the pool creation instant."""
    return ManualClock(start_time)

@pytest.fixture
def pool(clock):
    """Create a pool of 1,000,000 reward units on the manual clock."""
    return StakePool(1_000_000, clock=clock)

@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default loguru sink after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)

@pytest.fixture
def env_setup(monkeypatch):
    """Set up environment variables for testing."""
    monkeypatch.setenv("STAKEPOOL_LOG_LEVEL", "DEBUG")
