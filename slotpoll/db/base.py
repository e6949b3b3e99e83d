"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models so Base.metadata knows every table
from slotpoll.db.models.user import UserProfile  # noqa: F401, E402
from slotpoll.db.models.poll import Poll  # noqa: F401, E402
from slotpoll.db.models.poll_member import PollMember  # noqa: F401, E402
from slotpoll.db.models.schedule_vote import ScheduleVote  # noqa: F401, E402
from slotpoll.db.models.calendar_vote import CalendarVote  # noqa: F401, E402
