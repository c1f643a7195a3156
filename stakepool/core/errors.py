"""Errors raised by the staking ledger."""
from datetime import datetime


class StakePoolError(Exception):
    """Base class for stake pool errors."""


class DeadlineExceeded(StakePoolError):
    """Raised when a stake arrives after the enrollment window has closed."""

    def __init__(self, participant_id: str, deadline: datetime, attempted_at: datetime):
        self.participant_id = participant_id
        self.deadline = deadline
        self.attempted_at = attempted_at
        super().__init__(
            f"Cannot stake for {participant_id}: enrollment closed at "
            f"{deadline.isoformat()} (attempted at {attempted_at.isoformat()})"
        )
