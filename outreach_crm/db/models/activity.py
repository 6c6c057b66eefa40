from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, Text

from outreach_crm.db.base import Base, BigId


class AdditionalActivityORM(Base):
    __tablename__ = "additional_activities"

    id = Column(BigId, primary_key=True, autoincrement=True)
    company_id = Column(
        BigId,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    additional_courses = Column(Boolean, nullable=False, default=False)
    t_levels = Column(Boolean, nullable=False, default=False)
    apprenticeships = Column(Boolean, nullable=False, default=False)

    details = Column(Text, nullable=True)
    number_of_learners = Column(Integer, nullable=True)
    total_value = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
