"""Vote aggregate: slot key -> set of voter ids."""
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping

import structlog

from slotpoll.core.exceptions import IntegrityViolation
from slotpoll.engine.slots import SlotDomain

logger = structlog.get_logger(__name__)


class VoteAggregate:
    """
    Per-slot voter sets for one poll.

    The count of a slot is always ``len`` of its voter set; it is never
    tracked separately. ``add`` and ``remove`` are the incremental patches
    applied after a confirmed store write and refuse impossible transitions
    (double add, removing an absent voter) with IntegrityViolation.
    """

    def __init__(self, keys: Iterable[str] = ()):
        self._slots: Dict[str, set] = {}
        self.seed(keys)

    def seed(self, keys: Iterable[str]) -> None:
        """Ensure each key has an entry (zero votes if new)."""
        for key in keys:
            self._slots.setdefault(key, set())

    def __contains__(self, slot_key: str) -> bool:
        return slot_key in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VoteAggregate):
            return NotImplemented
        return self._slots == other._slots

    def __repr__(self) -> str:
        return f"VoteAggregate({self.counts()!r})"

    def keys(self) -> List[str]:
        return list(self._slots)

    def voters(self, slot_key: str) -> FrozenSet[str]:
        return frozenset(self._slots.get(slot_key, ()))

    def count(self, slot_key: str) -> int:
        return len(self._slots.get(slot_key, ()))

    def counts(self) -> Dict[str, int]:
        return {key: len(voters) for key, voters in self._slots.items()}

    def has_voted(self, slot_key: str, voter_id: str) -> bool:
        return voter_id in self._slots.get(slot_key, ())

    def add(self, slot_key: str, voter_id: str) -> int:
        """Record a vote; returns the new count."""
        voters = self._slots.setdefault(slot_key, set())
        if voter_id in voters:
            logger.error("aggregate_double_add", slot=slot_key, voter_id=voter_id)
            raise IntegrityViolation(f"Voter already counted for slot {slot_key}")
        voters.add(voter_id)
        return len(voters)

    def remove(self, slot_key: str, voter_id: str) -> int:
        """Retract a vote; returns the new count."""
        voters = self._slots.get(slot_key)
        if not voters or voter_id not in voters:
            logger.error("aggregate_missing_vote", slot=slot_key, voter_id=voter_id)
            raise IntegrityViolation(f"No vote to remove for slot {slot_key}")
        voters.discard(voter_id)
        return len(voters)

    def _record(self, slot_key: str, voter_id: str) -> None:
        # Loading path: a repeated (slot, voter) record is counted once
        self._slots.setdefault(slot_key, set()).add(voter_id)

    def copy(self) -> "VoteAggregate":
        clone = VoteAggregate()
        clone._slots = {key: set(voters) for key, voters in self._slots.items()}
        return clone


def build_aggregate(records: Iterable[Mapping[str, Any]], domain: SlotDomain) -> VoteAggregate:
    """
    Build a fresh aggregate from raw vote records.

    Every seed key of the domain starts at zero votes (the full grid for
    schedule polls); record slots outside the seed set are created on demand.
    Building twice from the same records yields equal aggregates.

    Args:
        records: Vote records with ``user_id`` and the domain's slot fields
        domain: Slot domain of the poll

    Returns:
        VoteAggregate
    """
    aggregate = VoteAggregate(domain.seed_keys())
    for record in records:
        aggregate._record(domain.key_for(record), record["user_id"])
    return aggregate
