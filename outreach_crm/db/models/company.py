from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Numeric, String, Text

from outreach_crm.db.base import Base, BigId


class CompanyORM(Base):
    __tablename__ = "companies"

    id = Column(BigId, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)

    industry = Column(String, nullable=True)
    location = Column(String, nullable=True)
    sector = Column(String, nullable=True)

    contact_name = Column(String, nullable=True)
    contact_role = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    website = Column(String, nullable=True)
    social_media = Column(String, nullable=True)

    # JSON array text, see outreach_crm.core.labels
    ai_tools_delivered = Column(Text, nullable=True)
    additional_sign_ups = Column(Text, nullable=True)
    resources_sent = Column(Text, nullable=True)

    value_to_college = Column(Numeric(10, 2), nullable=True)
    engagement_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
