"""Popularity ranking of slots.

Slots are grouped into tiers by distinct vote count: every slot sharing the
highest count is tier 1, the next distinct count tier 2, the one after that
tier 3. Slots with zero votes, or whose count is not among the top three
distinct counts, are tier 0 (unranked). Ties are intentional and share a tier.
"""
from typing import Dict, List

from slotpoll.core.constants import MAX_RANK_TIERS
from slotpoll.engine.aggregate import VoteAggregate

UNRANKED = 0


def top_counts(aggregate: VoteAggregate, limit: int = MAX_RANK_TIERS) -> List[int]:
    """Distinct nonzero vote counts, highest first, at most ``limit``."""
    distinct = {count for count in aggregate.counts().values() if count > 0}
    return sorted(distinct, reverse=True)[:limit]


def rank_slots(aggregate: VoteAggregate) -> Dict[str, int]:
    """
    Compute the rank tier of every slot in the aggregate.

    Depends only on the multiset of counts, so it is deterministic and
    independent of voter identities and insertion order.

    Returns:
        Dict mapping slot key -> tier (1..3, or 0 when unranked)
    """
    tiers = {count: position for position, count in enumerate(top_counts(aggregate), start=1)}
    return {
        key: tiers.get(count, UNRANKED)
        for key, count in aggregate.counts().items()
    }
