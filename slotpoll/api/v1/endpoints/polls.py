"""Poll endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from slotpoll.api.deps import get_current_voter, get_poll_session, get_store
from slotpoll.core.rate_limit import limiter, RATE_LIMITS
from slotpoll.engine.session import PollSession, VoterContext
from slotpoll.schemas import (
    CalendarPollCreate,
    PollDetail,
    PollStatusUpdate,
    PollSummary,
    SchedulePollCreate,
    SlotState,
    SuccessResponse,
    VoteRequest,
    VoteResponse,
)
from slotpoll.services import (
    create_calendar_poll,
    create_schedule_poll,
    delete_poll,
    emails_for,
    ensure_can_view,
    list_polls,
    update_poll_status,
)
from slotpoll.store import RecordStore

router = APIRouter()


async def _open_session(session: PollSession, poll_id: str) -> None:
    """Load a poll into the session and check the voter may see it."""
    await session.activate(poll_id)
    await ensure_can_view(session.store, session.poll, session.voter)


@router.get("", response_model=List[PollSummary])
async def list_polls_endpoint(
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> List[PollSummary]:
    """
    List polls the signed-in user owns or was invited to, sorted by name.

    Example:
        Response (200):
            [
                {
                    "id": "0b6f...",
                    "kind": "schedule",
                    "name": "Team sync",
                    "status": "Open",
                    "is_owner": true,
                    "days": ["Mon", "Wed"],
                    ...
                }
            ]
    """
    polls = await list_polls(store, voter)
    return [PollSummary.from_record(poll, voter.user_id) for poll in polls]


@router.post("/schedule", response_model=PollSummary, status_code=201)
async def create_schedule_poll_endpoint(
    poll: SchedulePollCreate,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> PollSummary:
    """
    Create a weekly schedule poll.

    The grid is the selected days x the configured working hours
    (07:00-17:30 in 30-minute steps by default).

    Example:
        Request:
            POST /api/v1/polls/schedule
            {
                "name": "Team sync",
                "description": "Pick your free slots",
                "days": ["Mon", "Wed"]
            }

        Response (400):
            {
                "detail": "Please select at least one day for schedule poll"
            }
    """
    try:
        record = await create_schedule_poll(
            store, voter, poll.name, poll.days, description=poll.description
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PollSummary.from_record(record, voter.user_id)


@router.post("/calendar", response_model=PollSummary, status_code=201)
async def create_calendar_poll_endpoint(
    poll: CalendarPollCreate,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> PollSummary:
    """Create a calendar poll with one votable slot per day in [start_date, end_date]."""
    try:
        record = await create_calendar_poll(
            store, voter, poll.name, poll.start_date, poll.end_date, description=poll.description
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PollSummary.from_record(record, voter.user_id)


@router.get("/{poll_id}", response_model=PollDetail)
async def get_poll_endpoint(
    poll_id: str,
    session: PollSession = Depends(get_poll_session),
) -> PollDetail:
    """
    Get a poll with its full tally.

    Schedule polls return every grid cell in day-then-hour order; calendar
    polls return every date in range. Each slot carries its vote count, the
    voters' e-mails, whether the caller voted, and its rank tier (1-3 for the
    three busiest distinct counts, 0 otherwise).

    Raises:
        HTTPException: 401 if not signed in
        HTTPException: 403 if not the owner or an invited member
        HTTPException: 404 if the poll does not exist
        HTTPException: 503 if poll data could not be fetched
    """
    await _open_session(session, poll_id)
    snapshot = session.snapshot()

    voter_ids = {voter for slot in snapshot.slots for voter in slot.voters}
    emails = await emails_for(session.store, voter_ids)

    return PollDetail(
        poll=PollSummary.from_record(snapshot.poll, session.voter.user_id),
        slots=[
            SlotState(
                slot=slot.slot,
                count=slot.count,
                voted=slot.voted,
                rank=slot.rank,
                voters=[emails.get(voter, voter) for voter in slot.voters],
            )
            for slot in snapshot.slots
        ],
    )


@router.post("/{poll_id}/votes", response_model=VoteResponse)
@limiter.limit(RATE_LIMITS["vote"])
async def toggle_vote_endpoint(
    request: Request,
    poll_id: str,
    vote_request: VoteRequest,
    session: PollSession = Depends(get_poll_session),
) -> VoteResponse:
    """
    Toggle the caller's vote on one slot.

    If the caller already voted for the slot the vote is removed, otherwise
    it is added. The tally is only updated after the store confirms the
    write.

    Example:
        Request:
            POST /api/v1/polls/0b6f.../votes
            {
                "slot": "Mon-07:00:00"
            }

        Response (200):
            {
                "slot": "Mon-07:00:00",
                "voted": true,
                "count": 3,
                "ranks": {"Mon-07:00:00": 1, "Wed-09:30:00": 2}
            }

    Raises:
        HTTPException: 400 if the slot is not part of the poll
        HTTPException: 401 if not signed in
        HTTPException: 409 if the poll is Closed or Cancelled
        HTTPException: 503 if the vote could not be saved
    """
    await _open_session(session, poll_id)
    result = await session.toggle(vote_request.slot)
    return VoteResponse(
        slot=result.slot,
        voted=result.voted,
        count=result.count,
        ranks={slot: tier for slot, tier in session.ranks.items() if tier},
    )


@router.patch("/{poll_id}/status", response_model=PollSummary)
async def update_status_endpoint(
    poll_id: str,
    update: PollStatusUpdate,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> PollSummary:
    """Set a poll's status to Open, Closed or Cancelled (owner only)."""
    try:
        poll = await update_poll_status(store, voter, poll_id, update.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PollSummary.from_record(poll, voter.user_id)


@router.delete("/{poll_id}", response_model=SuccessResponse)
async def delete_poll_endpoint(
    poll_id: str,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> SuccessResponse:
    """Delete a poll together with its votes and memberships (owner only)."""
    await delete_poll(store, voter, poll_id)
    return SuccessResponse(success=True, message="Poll deleted")
