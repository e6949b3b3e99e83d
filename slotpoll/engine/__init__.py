"""Vote aggregation, ranking and toggle engine."""
from slotpoll.engine.aggregate import VoteAggregate, build_aggregate
from slotpoll.engine.ranking import UNRANKED, rank_slots, top_counts
from slotpoll.engine.session import PollSession, PollSnapshot, SlotView, VoterContext
from slotpoll.engine.slots import CalendarDomain, ScheduleDomain, SlotDomain, domain_for, working_hours
from slotpoll.engine.toggle import ToggleResult, toggle_vote

__all__ = [
    # aggregate
    "VoteAggregate",
    "build_aggregate",
    # ranking
    "UNRANKED",
    "rank_slots",
    "top_counts",
    # session
    "PollSession",
    "PollSnapshot",
    "SlotView",
    "VoterContext",
    # slots
    "CalendarDomain",
    "ScheduleDomain",
    "SlotDomain",
    "domain_for",
    "working_hours",
    # toggle
    "ToggleResult",
    "toggle_vote",
]
