from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from outreach_crm.db.base import Base, BigId


class ResourceORM(Base):
    __tablename__ = "resources"

    id = Column(BigId, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    # "Slide Deck" | "Guide" | "Video" | "Newsletter" | "Course Link"
    type = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    link = Column(Text, nullable=False)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))


class ResourceDistributionORM(Base):
    __tablename__ = "resource_distributions"

    id = Column(BigId, primary_key=True, autoincrement=True)
    resource_id = Column(
        BigId,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id = Column(
        BigId,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    tag_id = Column(
        BigId,
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=True,
    )

    date_sent = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    clicks = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
