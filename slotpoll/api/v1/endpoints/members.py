"""Poll membership endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from slotpoll.api.deps import get_current_voter, get_store
from slotpoll.engine.session import VoterContext
from slotpoll.schemas import MemberCreate, MemberResponse, SuccessResponse
from slotpoll.services import add_member, ensure_can_view, get_poll, list_members, remove_member
from slotpoll.store import RecordStore

router = APIRouter()


@router.get("/{poll_id}/members", response_model=List[MemberResponse])
async def list_members_endpoint(
    poll_id: str,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> List[MemberResponse]:
    """List the users invited to a poll (visible to the owner and members)."""
    poll = await get_poll(store, poll_id)
    await ensure_can_view(store, poll, voter)
    return [MemberResponse(**member) for member in await list_members(store, poll_id)]


@router.post("/{poll_id}/members", response_model=MemberResponse, status_code=201)
async def add_member_endpoint(
    poll_id: str,
    member: MemberCreate,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> MemberResponse:
    """
    Invite a registered user to a poll by e-mail (owner only).

    Example:
        Request:
            POST /api/v1/polls/0b6f.../members
            {
                "email": "sam@example.com"
            }

        Response (400):
            {
                "detail": "No user with this email"
            }
    """
    try:
        created = await add_member(store, voter, poll_id, member.email)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MemberResponse(**created)


@router.delete("/{poll_id}/members/{member_id}", response_model=SuccessResponse)
async def remove_member_endpoint(
    poll_id: str,
    member_id: int,
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> SuccessResponse:
    """Remove an invited member from a poll (owner only)."""
    try:
        await remove_member(store, voter, poll_id, member_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SuccessResponse(success=True, message="Member removed")
