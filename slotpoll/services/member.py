"""Poll membership business logic."""
from typing import Any, Dict, List

import structlog

from slotpoll.core.constants import POLL_MEMBERS
from slotpoll.engine.session import VoterContext
from slotpoll.services.poll import ensure_owner, get_poll
from slotpoll.services.user import emails_for, get_user_by_email
from slotpoll.store.base import RecordStore

logger = structlog.get_logger(__name__)


async def list_members(store: RecordStore, poll_id: str) -> List[Dict[str, Any]]:
    """Invited members of a poll as ``{id, user_id, email}``."""
    memberships = await store.query(POLL_MEMBERS, {"poll_id": poll_id}, order_by=["id"])
    emails = await emails_for(store, [m["user_id"] for m in memberships])
    return [
        {"id": m["id"], "user_id": m["user_id"], "email": emails.get(m["user_id"], "")}
        for m in memberships
    ]


async def add_member(store: RecordStore, voter: VoterContext, poll_id: str, email: str) -> Dict[str, Any]:
    """
    Invite the user with ``email`` to a poll (owner only).

    Raises:
        ValueError: If the user does not exist, is the owner, or is already a member
        PollNotFound, PermissionDenied
    """
    poll = await get_poll(store, poll_id)
    ensure_owner(poll, voter)

    user = await get_user_by_email(store, email)
    if user["id"] == poll["owner_id"]:
        raise ValueError("The poll owner is already part of this poll")

    if await store.get(POLL_MEMBERS, {"poll_id": poll_id, "user_id": user["id"]}) is not None:
        raise ValueError("User is already a member of this poll")

    membership = await store.insert(POLL_MEMBERS, {"poll_id": poll_id, "user_id": user["id"]})
    logger.info("poll_member_added", poll_id=poll_id, user_id=user["id"])
    return {"id": membership["id"], "user_id": user["id"], "email": user["email"]}


async def remove_member(store: RecordStore, voter: VoterContext, poll_id: str, member_id: int) -> None:
    """
    Remove a membership (owner only).

    Raises:
        ValueError: If the membership does not belong to this poll
        PollNotFound, PermissionDenied
    """
    poll = await get_poll(store, poll_id)
    ensure_owner(poll, voter)

    removed = await store.delete(POLL_MEMBERS, {"id": member_id, "poll_id": poll_id})
    if not removed:
        raise ValueError("Member not found")
    logger.info("poll_member_removed", poll_id=poll_id, member_id=member_id)
