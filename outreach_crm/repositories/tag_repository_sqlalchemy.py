from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach_crm.db.models import CompanyTagORM, TagORM
from outreach_crm.schemas.tag import TagCreate, TagResponse


class TagRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def list(self, *, tag_type: str | None = None) -> list[TagResponse]:
        q = select(TagORM)
        if tag_type:
            q = q.where(TagORM.type == tag_type)

        q = q.order_by(TagORM.type.asc(), TagORM.name.asc())
        return [TagResponse.model_validate(r) for r in self.db.scalars(q).all()]

    def create(self, data: TagCreate) -> TagResponse:
        orm = TagORM(
            name=data.name,
            type=data.type,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(orm)
        self.db.commit()
        self.db.refresh(orm)
        return TagResponse.model_validate(orm)

    def company_ids_for_tag(self, tag_id: int) -> list[int]:
        """Companies currently linked to ``tag_id``, in link order."""
        rows = self.db.scalars(
            select(CompanyTagORM.company_id)
            .where(CompanyTagORM.tag_id == tag_id)
            .order_by(CompanyTagORM.id.asc())
        ).all()
        return list(rows)
