"""CalendarVote model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Date, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from slotpoll.db.base import Base


class CalendarVote(Base):
    __tablename__ = "calendar_votes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False)
    vote_date = Column(Date, nullable=False)
    user_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    poll = relationship("Poll", back_populates="calendar_votes")

    __table_args__ = (
        Index("idx_calendar_votes_poll", "poll_id"),
        UniqueConstraint("poll_id", "vote_date", "user_id", name="uq_calendar_vote"),
    )
