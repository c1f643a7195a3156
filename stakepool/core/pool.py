"""Fixed-pool staking ledger."""
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple
from loguru import logger

from .clock import Clock, SystemClock
from .distribution import Distribution, RewardEntry
from .errors import DeadlineExceeded
from .stake import StakeRecord, UINT64_MAX

ENROLLMENT_WINDOW = timedelta(days=7)

class StakePool:
    """Stakes recorded during a 7 day enrollment window, paid out pro rata.

    The pool is open while ``clock.now() < created_at + ENROLLMENT_WINDOW``.
    Once the window has passed every ``stake`` call raises
    ``DeadlineExceeded``; distribution stays available either way.

    The pool takes no locks. Hosts sharing one pool between threads must
    serialise ``stake`` calls against each other and against readers.
    """

    def __init__(self, total_reward: int, clock: Optional[Clock] = None):
        """Initialize stake pool.

        Args:
            total_reward: Reward units to split across all stakes
            clock: Time source; defaults to wall-clock time

        Raises:
            ValueError: If total_reward is not an integer in uint64 range, or
                the clock is too close to the end of the calendar for a
                full enrollment window
        """
        if isinstance(total_reward, bool) or not isinstance(total_reward, int):
            raise ValueError(f"total_reward must be an integer, got {total_reward!r}")
        if not 0 <= total_reward <= UINT64_MAX:
            raise ValueError(f"total_reward must be between 0 and {UINT64_MAX}, got {total_reward}")

        self.total_reward = total_reward
        self.clock = clock or SystemClock()
        self.stakes: Dict[str, int] = {}
        self.created_at: datetime = self.clock.now()
        try:
            self.deadline
        except OverflowError:
            raise ValueError(f"No room for a {ENROLLMENT_WINDOW.days} day window after {self.created_at.isoformat()}")
        logger.debug(f"Created stake pool with {total_reward} reward units, closing at {self.deadline.isoformat()}")

    @property
    def deadline(self) -> datetime:
        """Instant at which staking closes."""
        return self.created_at + ENROLLMENT_WINDOW

    @property
    def total_staked(self) -> int:
        return sum(self.stakes.values())

    @property
    def participants(self) -> List[str]:
        """Participant ids in distribution order."""
        return sorted(self.stakes)

    def __len__(self) -> int:
        return len(self.stakes)

    def is_open(self) -> bool:
        """Check whether stakes are still accepted."""
        return self.clock.now() < self.deadline

    def time_remaining(self) -> timedelta:
        """Time left before staking closes, zero once closed."""
        return max(self.deadline - self.clock.now(), timedelta(0))

    def get_stake(self, participant_id: str) -> Optional[int]:
        return self.stakes.get(participant_id)

    def stake(self, participant_id: str, amount: int) -> None:
        """Record a participant's stake, replacing any earlier one.

        Args:
            participant_id: Identity of the staker
            amount: Stake amount; a later call for the same id overwrites it

        Raises:
            DeadlineExceeded: If the enrollment window has closed
            pydantic.ValidationError: If the id is empty or the amount is
                negative or beyond uint64
        """
        now = self.clock.now()
        if now >= self.deadline:
            logger.warning(f"Rejected stake from {participant_id}: enrollment closed at {self.deadline.isoformat()}")
            raise DeadlineExceeded(participant_id, self.deadline, now)

        record = StakeRecord(participant_id=participant_id, amount=amount, staked_at=now)
        previous = self.stakes.get(record.participant_id)
        self.stakes[record.participant_id] = record.amount
        if previous is None:
            logger.debug(f"Recorded stake of {record.amount} from {record.participant_id} at {record.staked_at.isoformat()}")
        else:
            logger.debug(f"Replaced stake of {previous} from {record.participant_id} with {record.amount} at {record.staked_at.isoformat()}")

    def distribution(self) -> Distribution:
        """Compute each participant's share of the reward pool.

        Each reward is ``stake * total_reward // total_staked``. The
        remainder lost to truncation is left undistributed. With no stakes,
        or only zero stakes, nothing is distributed.
        """
        total_staked = self.total_staked
        if total_staked == 0:
            logger.debug("No stake recorded, nothing to distribute")
            return Distribution(total_reward=self.total_reward, total_staked=0)

        entries = [
            RewardEntry(
                participant_id=participant_id,
                stake=self.stakes[participant_id],
                reward=self.stakes[participant_id] * self.total_reward // total_staked,
            )
            for participant_id in self.participants
        ]
        result = Distribution(total_reward=self.total_reward, total_staked=total_staked, entries=entries)
        logger.debug(
            f"Distributed {result.total_distributed} of {self.total_reward} "
            f"across {len(entries)} participants ({result.undistributed} undistributed)"
        )
        return result

    def distribute_rewards(self) -> List[Tuple[str, int]]:
        """Get ``(participant_id, reward)`` pairs sorted by participant id."""
        return self.distribution().as_pairs()
