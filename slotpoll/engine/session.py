"""Poll session: owns one poll's vote aggregate from load to teardown.

A session is bound to an explicit VoterContext (the acting user) and a
record store. ``activate`` loads a poll and builds its aggregate,
``toggle`` delegates to the toggle protocol and re-ranks, ``deactivate``
drops everything. Loads are tagged with a generation number so a fetch that
completes after the session moved to another poll is discarded instead of
overwriting the active aggregate.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import structlog

from slotpoll.core.constants import POLL_STATUS_OPEN, POLLS
from slotpoll.core.exceptions import (
    AuthenticationRequired,
    PollError,
    PollNotFound,
    PollNotOpen,
    StoreReadFailure,
    ToggleInProgress,
)
from slotpoll.engine.aggregate import VoteAggregate, build_aggregate
from slotpoll.engine.ranking import UNRANKED, rank_slots
from slotpoll.engine.slots import SlotDomain, domain_for
from slotpoll.engine.toggle import ToggleResult, toggle_vote
from slotpoll.store.base import RecordStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VoterContext:
    """The authenticated user acting in a session."""

    user_id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class SlotView:
    slot: str
    count: int
    voters: List[str]
    voted: bool
    rank: int


@dataclass(frozen=True)
class PollSnapshot:
    poll: Dict[str, Any]
    slots: List[SlotView] = field(default_factory=list)


class PollSession:
    """Lifecycle of one poll's aggregate for one viewer."""

    def __init__(
        self,
        store: RecordStore,
        voter: Optional[VoterContext],
        hours: Optional[Sequence[str]] = None,
    ):
        self.store = store
        self.voter = voter
        self.hours = hours
        self.poll: Optional[Dict[str, Any]] = None
        self.domain: Optional[SlotDomain] = None
        self.aggregate: Optional[VoteAggregate] = None
        self.ranks: Dict[str, int] = {}
        self.last_error: Optional[str] = None
        self._generation = 0
        self._pending: set = set()

    @property
    def poll_id(self) -> Optional[str]:
        return self.poll["id"] if self.poll else None

    @property
    def is_active(self) -> bool:
        return self.aggregate is not None

    def _require_voter(self) -> str:
        if self.voter is None or not self.voter.user_id:
            raise AuthenticationRequired()
        return self.voter.user_id

    def _fail(self, error: PollError) -> PollError:
        self.last_error = error.message
        return error

    async def _fetch(self, collection: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            return await self.store.query(collection, filters)
        except PollError:
            raise
        except Exception as e:
            logger.error("poll_fetch_error", collection=collection, error=str(e))
            raise StoreReadFailure() from e

    async def activate(self, poll_id: str) -> bool:
        """
        Load ``poll_id`` and build its aggregate and ranks.

        On failure the previously loaded state is kept and ``last_error`` is
        set.

        Returns:
            True if the load was applied, False if it was superseded by a
            newer activate/deactivate while in flight.

        Raises:
            AuthenticationRequired: No acting voter
            PollNotFound: The poll does not exist
            StoreReadFailure: Poll or vote data could not be fetched
        """
        try:
            self._require_voter()
        except AuthenticationRequired as e:
            raise self._fail(e)

        self._generation += 1
        generation = self._generation
        logger.info("poll_load_started", poll_id=poll_id, generation=generation)

        try:
            polls = await self._fetch(POLLS, {"id": poll_id})
            if generation != self._generation:
                logger.info("poll_load_discarded", poll_id=poll_id, generation=generation)
                return False
            if not polls:
                raise PollNotFound()
            poll = polls[0]

            domain = domain_for(poll, self.hours)
            records = await self._fetch(domain.vote_collection, {"poll_id": poll_id})
        except PollError as e:
            if generation == self._generation:
                self.last_error = e.message
            logger.warning("poll_load_failed", poll_id=poll_id, error=e.message)
            raise

        if generation != self._generation:
            logger.info("poll_load_discarded", poll_id=poll_id, generation=generation)
            return False

        self.poll = poll
        self.domain = domain
        self.aggregate = build_aggregate(records, domain)
        self.ranks = rank_slots(self.aggregate)
        self._pending = set()
        self.last_error = None
        logger.info("poll_loaded", poll_id=poll_id, kind=domain.kind, votes=len(records))
        return True

    async def refresh_metadata(self) -> Dict[str, Any]:
        """
        Re-fetch the active poll's metadata (status, name, ...).

        The aggregate is kept as is.

        Raises:
            PollNotFound: No active poll, or it was deleted (session is
                deactivated)
            StoreReadFailure: Metadata could not be fetched
        """
        if not self.is_active:
            raise self._fail(PollNotFound("No poll selected"))

        generation = self._generation
        poll_id = self.poll_id
        try:
            polls = await self._fetch(POLLS, {"id": poll_id})
        except PollError as e:
            raise self._fail(e)

        if generation != self._generation:
            return self.poll
        if not polls:
            self.deactivate()
            raise self._fail(PollNotFound())

        self.poll = polls[0]
        self.last_error = None
        return self.poll

    async def toggle(self, slot_key: str) -> ToggleResult:
        """
        Toggle the acting voter's vote on ``slot_key`` and re-rank.

        Raises:
            AuthenticationRequired: No acting voter; nothing sent to the store
            PollNotFound: No active poll
            PollNotOpen: Poll is Closed or Cancelled
            ToggleInProgress: A toggle on the same slot has not completed yet
            InvalidSlot, StoreWriteFailure, IntegrityViolation: see toggle_vote
        """
        try:
            voter_id = self._require_voter()
            if not self.is_active:
                raise PollNotFound("No poll selected")
            if self.poll.get("status") != POLL_STATUS_OPEN:
                raise PollNotOpen(f"Poll is {self.poll.get('status')}; voting is disabled")
            if slot_key in self._pending:
                raise ToggleInProgress()
        except PollError as e:
            raise self._fail(e)

        generation = self._generation
        aggregate = self.aggregate
        pending = self._pending
        pending.add(slot_key)
        try:
            result = await toggle_vote(
                self.store, self.domain, self.poll_id, aggregate, voter_id, slot_key
            )
        except PollError as e:
            raise self._fail(e)
        finally:
            pending.discard(slot_key)

        if generation == self._generation:
            self.ranks = rank_slots(self.aggregate)
            self.last_error = None
        return result

    def deactivate(self) -> None:
        """Drop the aggregate and all poll state; in-flight loads are discarded."""
        if self.poll is not None:
            logger.info("poll_session_closed", poll_id=self.poll_id)
        self._generation += 1
        self.poll = None
        self.domain = None
        self.aggregate = None
        self.ranks = {}
        self._pending = set()

    def rank(self, slot_key: str) -> int:
        return self.ranks.get(slot_key, UNRANKED)

    def snapshot(self) -> PollSnapshot:
        """
        Display-ready view of the active poll.

        Schedule polls list every grid cell (day-then-hour); calendar polls
        list every date in range, including days nobody voted for.
        """
        if not self.is_active:
            raise PollNotFound("No poll selected")

        voter_id = self.voter.user_id if self.voter else None
        slots = [
            SlotView(
                slot=key,
                count=self.aggregate.count(key),
                voters=sorted(self.aggregate.voters(key)),
                voted=voter_id is not None and self.aggregate.has_voted(key, voter_id),
                rank=self.rank(key),
            )
            for key in self.domain.ordered_keys()
        ]
        return PollSnapshot(poll=dict(self.poll), slots=slots)
