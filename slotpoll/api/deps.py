"""Shared API dependencies."""
from typing import Optional
from fastapi import Depends
from sqlalchemy.orm import Session

from slotpoll.db import get_db
from slotpoll.core.config import settings
from slotpoll.core.security import get_current_voter, get_optional_voter
from slotpoll.engine.session import PollSession, VoterContext
from slotpoll.engine.slots import working_hours
from slotpoll.store import RecordStore, SqlRecordStore


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's database session."""
    return SqlRecordStore(db)


def schedule_hours() -> list:
    """Working hours of the schedule grid as configured."""
    return working_hours(
        settings.SCHEDULE_DAY_START,
        settings.SCHEDULE_DAY_END,
        settings.SCHEDULE_SLOT_MINUTES,
    )


def get_poll_session(
    store: RecordStore = Depends(get_store),
    voter: Optional[VoterContext] = Depends(get_optional_voter),
) -> PollSession:
    """A poll session for the acting voter (None when signed out)."""
    return PollSession(store, voter, hours=schedule_hours())


__all__ = [
    "get_db",
    "get_store",
    "get_current_voter",
    "get_optional_voter",
    "get_poll_session",
    "schedule_hours",
]
