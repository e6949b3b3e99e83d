"""Poll business logic."""
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import structlog

from slotpoll.core.constants import (
    POLL_KIND_CALENDAR,
    POLL_KIND_SCHEDULE,
    POLL_MEMBERS,
    POLL_STATUS_OPEN,
    POLL_STATUSES,
    POLLS,
)
from slotpoll.core.exceptions import PermissionDenied, PollNotFound
from slotpoll.core.sanitization import sanitize_description, sanitize_poll_name
from slotpoll.engine.session import VoterContext
from slotpoll.engine.slots import normalize_days
from slotpoll.store.base import RecordStore

logger = structlog.get_logger(__name__)


async def get_poll(store: RecordStore, poll_id: str) -> Dict[str, Any]:
    """Fetch a poll record or raise PollNotFound."""
    poll = await store.get(POLLS, {"id": poll_id})
    if poll is None:
        raise PollNotFound()
    return poll


async def is_member(store: RecordStore, poll_id: str, user_id: str) -> bool:
    membership = await store.get(POLL_MEMBERS, {"poll_id": poll_id, "user_id": user_id})
    return membership is not None


def ensure_owner(poll: Dict[str, Any], voter: VoterContext) -> None:
    if poll["owner_id"] != voter.user_id:
        raise PermissionDenied("Only the poll owner can change this poll")


async def ensure_can_view(store: RecordStore, poll: Dict[str, Any], voter: VoterContext) -> None:
    """Owners and invited members may view and vote; everyone else gets 403."""
    if poll["owner_id"] == voter.user_id:
        return
    if not await is_member(store, poll["id"], voter.user_id):
        raise PermissionDenied("You have not been invited to this poll")


async def list_polls(store: RecordStore, voter: VoterContext) -> List[Dict[str, Any]]:
    """
    Polls the voter owns or has been invited to, sorted by name.

    Args:
        store: Record store
        voter: Acting user

    Returns:
        List of poll records
    """
    owned = await store.query(POLLS, {"owner_id": voter.user_id})
    memberships = await store.query(POLL_MEMBERS, {"user_id": voter.user_id})

    polls = {poll["id"]: poll for poll in owned}
    shared_ids = [m["poll_id"] for m in memberships if m["poll_id"] not in polls]
    if shared_ids:
        for poll in await store.query(POLLS, {"id": shared_ids}):
            polls[poll["id"]] = poll

    return sorted(polls.values(), key=lambda poll: poll["name"].lower())


async def create_schedule_poll(
    store: RecordStore,
    voter: VoterContext,
    name: str,
    days: Sequence[str],
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a weekly schedule poll owned by ``voter``.

    Raises:
        ValueError: If the name is empty or no valid day is selected
    """
    record = {
        "kind": POLL_KIND_SCHEDULE,
        "name": sanitize_poll_name(name),
        "description": sanitize_description(description),
        "owner_id": voter.user_id,
        "status": POLL_STATUS_OPEN,
        "days": ",".join(normalize_days(days)),
    }
    poll = await store.insert(POLLS, record)
    logger.info("poll_created", poll_id=poll["id"], kind=POLL_KIND_SCHEDULE, owner_id=voter.user_id)
    return poll


async def create_calendar_poll(
    store: RecordStore,
    voter: VoterContext,
    name: str,
    start_date: date,
    end_date: date,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a date-range calendar poll owned by ``voter``.

    Raises:
        ValueError: If the name is empty or the range is inverted
    """
    if start_date is None or end_date is None:
        raise ValueError("Please enter both start and end dates for calendar poll")
    if end_date < start_date:
        raise ValueError("End date must not be before start date")

    record = {
        "kind": POLL_KIND_CALENDAR,
        "name": sanitize_poll_name(name),
        "description": sanitize_description(description),
        "owner_id": voter.user_id,
        "status": POLL_STATUS_OPEN,
        "start_date": start_date,
        "end_date": end_date,
    }
    poll = await store.insert(POLLS, record)
    logger.info("poll_created", poll_id=poll["id"], kind=POLL_KIND_CALENDAR, owner_id=voter.user_id)
    return poll


async def update_poll_status(
    store: RecordStore, voter: VoterContext, poll_id: str, status: str
) -> Dict[str, Any]:
    """
    Change a poll's status (owner only).

    Raises:
        ValueError: If the status is not Open, Closed or Cancelled
        PollNotFound, PermissionDenied
    """
    if status not in POLL_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(POLL_STATUSES)}")

    poll = await get_poll(store, poll_id)
    ensure_owner(poll, voter)

    await store.update(POLLS, {"id": poll_id}, {"status": status})
    logger.info("poll_status_changed", poll_id=poll_id, old_status=poll["status"], new_status=status)
    return {**poll, "status": status}


async def delete_poll(store: RecordStore, voter: VoterContext, poll_id: str) -> None:
    """Delete a poll with its votes and memberships (owner only)."""
    poll = await get_poll(store, poll_id)
    ensure_owner(poll, voter)

    await store.delete(POLLS, {"id": poll_id})
    logger.info("poll_deleted", poll_id=poll_id, owner_id=voter.user_id)
