"""ScheduleVote model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from slotpoll.db.base import Base


class ScheduleVote(Base):
    __tablename__ = "schedule_votes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False)
    day = Column(String(3), nullable=False)
    hour = Column(String(8), nullable=False)  # HH:MM:SS
    user_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    poll = relationship("Poll", back_populates="schedule_votes")

    __table_args__ = (
        Index("idx_schedule_votes_poll", "poll_id"),
        UniqueConstraint("poll_id", "day", "hour", "user_id", name="uq_schedule_vote"),
    )
