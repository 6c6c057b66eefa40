from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from outreach_crm.db.base import Base, BigId


class FileORM(Base):
    __tablename__ = "files"

    id = Column(BigId, primary_key=True, autoincrement=True)
    # Files may be uploaded before they are attached to a company
    company_id = Column(
        BigId,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    name = Column(String, nullable=False)
    type = Column(String, nullable=True)
    url = Column(Text, nullable=False)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
