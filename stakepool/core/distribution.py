"""Reward distribution results for Stake Pool."""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple


@dataclass
class RewardEntry:
    """Reward owed to one participant."""
    participant_id: str
    stake: int
    reward: int


@dataclass
class Distribution:
    """Outcome of splitting the reward pool across all recorded stakes.

    Entries are ordered ascending by participant id. Rewards are truncated
    to whole units, so ``total_distributed`` may fall short of
    ``total_reward``; the shortfall is reported as ``undistributed`` and is
    not handed to anyone.
    """
    total_reward: int
    total_staked: int
    entries: List[RewardEntry] = field(default_factory=list)

    @property
    def total_distributed(self) -> int:
        return sum(e.reward for e in self.entries)

    @property
    def undistributed(self) -> int:
        """Rounding dust left in the pool."""
        if not self.entries:
            return self.total_reward
        return self.total_reward - self.total_distributed

    def get(self, participant_id: str) -> Optional[int]:
        """Get a participant's reward, or None if they did not stake."""
        for entry in self.entries:
            if entry.participant_id == participant_id:
                return entry.reward
        return None

    def as_pairs(self) -> List[Tuple[str, int]]:
        """Return ``(participant_id, reward)`` pairs in distribution order."""
        return [(e.participant_id, e.reward) for e in self.entries]

    def to_dict(self) -> Dict:
        return {
            'total_reward': self.total_reward,
            'total_staked': self.total_staked,
            'total_distributed': self.total_distributed,
            'undistributed': self.undistributed,
            'rewards': [asdict(e) for e in self.entries],
        }
