"""Stake input validation for Stake Pool."""
from datetime import datetime
from pydantic import BaseModel, Field

UINT64_MAX = 2**64 - 1

class StakeRecord(BaseModel):
    """Record of a single stake call."""
    participant_id: str = Field(min_length=1)
    amount: int = Field(strict=True, ge=0, le=UINT64_MAX)
    staked_at: datetime
