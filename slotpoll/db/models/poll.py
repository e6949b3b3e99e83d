"""Poll model."""
import uuid
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from slotpoll.core.constants import POLL_STATUS_OPEN
from slotpoll.db.base import Base


class Poll(Base):
    """Schedule or calendar poll.

    Schedule polls use ``days`` (comma-joined weekday labels); calendar polls
    use ``start_date``/``end_date``.
    """

    __tablename__ = "polls"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    kind = Column(String(20), nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    owner_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False, default=POLL_STATUS_OPEN)
    days = Column(String(64), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    members = relationship("PollMember", back_populates="poll", cascade="all, delete-orphan")
    schedule_votes = relationship("ScheduleVote", back_populates="poll", cascade="all, delete-orphan")
    calendar_votes = relationship("CalendarVote", back_populates="poll", cascade="all, delete-orphan")

    __table_args__ = (Index("idx_polls_owner", "owner_id"),)
