"""User lookup endpoints."""
from fastapi import APIRouter, Depends, Query, Request

from slotpoll.api.deps import get_current_voter, get_store
from slotpoll.core.rate_limit import limiter, RATE_LIMITS
from slotpoll.engine.session import VoterContext
from slotpoll.schemas import EmailSuggestions
from slotpoll.services import suggest_emails
from slotpoll.store import RecordStore

router = APIRouter()


@router.get("/suggest", response_model=EmailSuggestions)
@limiter.limit(RATE_LIMITS["suggest"])
async def suggest_emails_endpoint(
    request: Request,
    q: str = Query(..., max_length=254),
    voter: VoterContext = Depends(get_current_voter),
    store: RecordStore = Depends(get_store),
) -> EmailSuggestions:
    """
    Autocomplete e-mails for the member invite box.

    Returns up to 5 registered e-mails starting with ``q``; an empty list
    until ``q`` has at least 3 characters.
    """
    return EmailSuggestions(emails=await suggest_emails(store, q))
