"""Pydantic schemas for request/response validation."""
from slotpoll.schemas.auth import LoginRequest, RegisterRequest, UserResponse
from slotpoll.schemas.poll import (
    CalendarPollCreate,
    PollDetail,
    PollStatusUpdate,
    PollSummary,
    SchedulePollCreate,
    SlotState,
)
from slotpoll.schemas.member import EmailSuggestions, MemberCreate, MemberResponse
from slotpoll.schemas.vote import VoteRequest, VoteResponse
from slotpoll.schemas.common import SuccessResponse

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "UserResponse",
    "CalendarPollCreate",
    "PollDetail",
    "PollStatusUpdate",
    "PollSummary",
    "SchedulePollCreate",
    "SlotState",
    "EmailSuggestions",
    "MemberCreate",
    "MemberResponse",
    "VoteRequest",
    "VoteResponse",
    "SuccessResponse",
]
