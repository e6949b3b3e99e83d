"""Vote toggle protocol.

One call is one transition of one voter on one slot: voted -> not voted, or
not voted -> voted. The direction is decided by the local aggregate, the
store mutation happens first, and the aggregate is patched only once the
store reports success.
"""
from dataclasses import dataclass
from typing import Any, Dict

import structlog

from slotpoll.core.exceptions import (
    AuthenticationRequired,
    InvalidSlot,
    PollError,
    StoreWriteFailure,
)
from slotpoll.engine.aggregate import VoteAggregate
from slotpoll.engine.slots import SlotDomain
from slotpoll.store.base import RecordStore

logger = structlog.get_logger(__name__)

ADD_FAILED = "Failed to add vote. Please try again."
REMOVE_FAILED = "Failed to remove vote. Please try again."


@dataclass(frozen=True)
class ToggleResult:
    slot: str
    voted: bool
    count: int


def vote_filter(domain: SlotDomain, poll_id: str, slot_key: str, voter_id: str) -> Dict[str, Any]:
    """Fields identifying the single vote record of (poll, slot, voter)."""
    return {"poll_id": poll_id, **domain.components(slot_key), "user_id": voter_id}


async def toggle_vote(
    store: RecordStore,
    domain: SlotDomain,
    poll_id: str,
    aggregate: VoteAggregate,
    voter_id: str,
    slot_key: str,
) -> ToggleResult:
    """
    Add or remove ``voter_id``'s vote on ``slot_key``.

    Args:
        store: Record store holding the vote records
        domain: Slot domain of the poll
        poll_id: Poll the vote belongs to
        aggregate: Local aggregate; patched only after a successful write
        voter_id: Acting voter
        slot_key: Target slot

    Returns:
        ToggleResult with the slot's new state

    Raises:
        AuthenticationRequired: No voter identity; nothing is sent to the store
        InvalidSlot: Slot is not part of the poll and holds no vote of ``voter_id``
        StoreWriteFailure: The store rejected the write; aggregate untouched
        IntegrityViolation: Local aggregate contradicted the confirmed write
    """
    if not voter_id:
        raise AuthenticationRequired()

    had_voted = aggregate.has_voted(slot_key, voter_id)
    # A vote left outside a reshaped grid can still be retracted
    if not had_voted and not domain.contains(slot_key):
        raise InvalidSlot(f"Slot {slot_key} is not part of this poll")

    record = vote_filter(domain, poll_id, slot_key, voter_id)

    try:
        if had_voted:
            await store.delete(domain.vote_collection, record)
        else:
            await store.insert(domain.vote_collection, record)
    except StoreWriteFailure as e:
        logger.warning(
            "vote_toggle_failed",
            poll_id=poll_id,
            slot=slot_key,
            voter_id=voter_id,
            action="remove" if had_voted else "add",
        )
        raise StoreWriteFailure(REMOVE_FAILED if had_voted else ADD_FAILED) from e
    except PollError:
        raise
    except Exception as e:
        logger.error(
            "vote_toggle_error",
            poll_id=poll_id,
            slot=slot_key,
            voter_id=voter_id,
            error=str(e),
            exception_type=type(e).__name__,
        )
        raise StoreWriteFailure(REMOVE_FAILED if had_voted else ADD_FAILED) from e

    if had_voted:
        count = aggregate.remove(slot_key, voter_id)
    else:
        count = aggregate.add(slot_key, voter_id)

    logger.info(
        "vote_toggled",
        poll_id=poll_id,
        slot=slot_key,
        voter_id=voter_id,
        action="removed" if had_voted else "added",
        count=count,
    )
    return ToggleResult(slot=slot_key, voted=not had_voted, count=count)
