from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint

from outreach_crm.db.base import Base, BigId


class TagORM(Base):
    __tablename__ = "tags"

    id = Column(BigId, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    # "Sector" | "Location" | "Engagement Type"
    type = Column(String, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))


class CompanyTagORM(Base):
    __tablename__ = "company_tags"
    __table_args__ = (
        UniqueConstraint("company_id", "tag_id", name="uq_company_tags_company_tag"),
    )

    id = Column(BigId, primary_key=True, autoincrement=True)
    company_id = Column(
        BigId,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag_id = Column(
        BigId,
        ForeignKey("tags.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
