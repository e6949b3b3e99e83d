"""Poll schemas."""
from datetime import date
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from slotpoll.core.constants import POLL_STATUSES
from slotpoll.core.sanitization import sanitize_description, sanitize_poll_name
from slotpoll.engine.slots import normalize_days, parse_days


class PollCreateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator('name')
    @classmethod
    def sanitize_name_field(cls, v: str) -> str:
        """Sanitize and validate poll name."""
        return sanitize_poll_name(v)

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_description(v)


class SchedulePollCreate(PollCreateBase):
    days: List[str] = Field(..., min_length=1, max_length=7)

    @field_validator('days')
    @classmethod
    def validate_days(cls, v: List[str]) -> List[str]:
        """Weekday labels, de-duplicated and in week order."""
        return normalize_days(v)


class CalendarPollCreate(PollCreateBase):
    start_date: date
    end_date: date

    @model_validator(mode='after')
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class PollStatusUpdate(BaseModel):
    status: str

    @field_validator('status')
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in POLL_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(POLL_STATUSES)}")
        return v


class PollSummary(BaseModel):
    id: str
    kind: str
    name: str
    description: Optional[str] = None
    status: str
    owner_id: str
    is_owner: bool
    days: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_record(cls, poll: Dict[str, Any], user_id: str) -> "PollSummary":
        return cls(
            id=poll["id"],
            kind=poll["kind"],
            name=poll["name"],
            description=poll.get("description"),
            status=poll["status"],
            owner_id=poll["owner_id"],
            is_owner=poll["owner_id"] == user_id,
            days=parse_days(poll.get("days")) or None,
            start_date=poll.get("start_date"),
            end_date=poll.get("end_date"),
        )


class SlotState(BaseModel):
    slot: str
    count: int
    voted: bool
    rank: int
    voters: List[str]


class PollDetail(BaseModel):
    poll: PollSummary
    slots: List[SlotState]
