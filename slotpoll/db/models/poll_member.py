"""PollMember model."""
from sqlalchemy import Column, Integer, String, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from slotpoll.db.base import Base


class PollMember(Base):
    __tablename__ = "poll_members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False)

    # Relationships
    poll = relationship("Poll", back_populates="members")

    __table_args__ = (
        Index("idx_poll_members_user", "user_id"),
        UniqueConstraint("poll_id", "user_id", name="uq_poll_member"),
    )
