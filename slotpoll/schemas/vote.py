"""Vote schemas."""
from typing import Dict
from pydantic import BaseModel, Field


class VoteRequest(BaseModel):
    # "Mon-07:00:00" for schedule polls, "2025-03-14" for calendar polls
    slot: str = Field(..., min_length=1, max_length=32)


class VoteResponse(BaseModel):
    slot: str
    voted: bool
    count: int
    # Rank tier of every slot currently ranked 1-3
    ranks: Dict[str, int]
