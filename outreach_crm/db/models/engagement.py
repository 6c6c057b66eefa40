from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from outreach_crm.db.base import Base, BigId


class EngagementORM(Base):
    __tablename__ = "engagements"

    id = Column(BigId, primary_key=True, autoincrement=True)
    company_id = Column(
        BigId,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date_of_contact = Column(Date, nullable=True)
    # JSON array text, see outreach_crm.core.labels
    ai_training_delivered = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    follow_ups = relationship(
        "FollowUpActionORM",
        back_populates="engagement",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FollowUpActionORM.id",
        lazy="selectin",
    )


class FollowUpActionORM(Base):
    __tablename__ = "follow_up_actions"

    id = Column(BigId, primary_key=True, autoincrement=True)
    engagement_id = Column(
        BigId,
        ForeignKey("engagements.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    task = Column(Text, nullable=False)
    due_date = Column(Date, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    engagement = relationship("EngagementORM", back_populates="follow_ups")
