"""Database models."""
from slotpoll.db.models.user import UserProfile
from slotpoll.db.models.poll import Poll
from slotpoll.db.models.poll_member import PollMember
from slotpoll.db.models.schedule_vote import ScheduleVote
from slotpoll.db.models.calendar_vote import CalendarVote

__all__ = ["UserProfile", "Poll", "PollMember", "ScheduleVote", "CalendarVote"]
