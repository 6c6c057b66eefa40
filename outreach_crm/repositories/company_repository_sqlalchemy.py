from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach_crm.core.labels import encode_labels
from outreach_crm.db.models import (
    AdditionalActivityORM,
    CompanyORM,
    CompanyTagORM,
    EngagementORM,
    FileORM,
    TagORM,
)
from outreach_crm.schemas.activity import ActivityResponse
from outreach_crm.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdate,
)
from outreach_crm.schemas.engagement import EngagementResponse
from outreach_crm.schemas.file import FileResponse
from outreach_crm.schemas.tag import TagResponse

LABEL_FIELDS = ("ai_tools_delivered", "additional_sign_ups", "resources_sent")
PLAIN_FIELDS = (
    "industry",
    "location",
    "sector",
    "contact_name",
    "contact_role",
    "email",
    "phone",
    "website",
    "social_media",
    "value_to_college",
    "engagement_notes",
)


def _to_response(orm: CompanyORM) -> CompanyResponse:
    return CompanyResponse.model_validate(orm)


class CompanyRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def exists(self, company_id: int) -> bool:
        return self.db.get(CompanyORM, company_id) is not None

    def get_detail(self, company_id: int) -> CompanyDetailResponse | None:
        orm = self.db.get(CompanyORM, company_id)
        if not orm:
            return None

        tags = self.db.scalars(
            select(TagORM)
            .join(CompanyTagORM, CompanyTagORM.tag_id == TagORM.id)
            .where(CompanyTagORM.company_id == company_id)
            .order_by(TagORM.type.asc(), TagORM.name.asc())
        ).all()
        engagements = self.db.scalars(
            select(EngagementORM)
            .where(EngagementORM.company_id == company_id)
            .order_by(EngagementORM.date_of_contact.desc().nullslast(), EngagementORM.id.desc())
        ).all()
        activities = self.db.scalars(
            select(AdditionalActivityORM)
            .where(AdditionalActivityORM.company_id == company_id)
            .order_by(AdditionalActivityORM.id.asc())
        ).all()
        files = self.db.scalars(
            select(FileORM)
            .where(FileORM.company_id == company_id)
            .order_by(FileORM.created_at.desc(), FileORM.id.desc())
        ).all()

        detail = CompanyDetailResponse.model_validate(orm)
        detail.tags = [TagResponse.model_validate(t) for t in tags]
        detail.engagements = [EngagementResponse.model_validate(e) for e in engagements]
        detail.activities = [ActivityResponse.model_validate(a) for a in activities]
        detail.files = [FileResponse.model_validate(f) for f in files]
        return detail

    def list(
        self,
        *,
        search: str | None = None,
        tag_ids: list[int] | None = None,
        industry: str | None = None,
        sector: str | None = None,
        location: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[CompanyResponse]:
        q = select(CompanyORM)
        if search:
            q = q.where(CompanyORM.name.ilike(f"%{search}%"))
        if tag_ids:
            tagged = select(CompanyTagORM.company_id).where(CompanyTagORM.tag_id.in_(tag_ids))
            q = q.where(CompanyORM.id.in_(tagged))
        if industry:
            q = q.where(CompanyORM.industry == industry)
        if sector:
            q = q.where(CompanyORM.sector == sector)
        if location:
            q = q.where(CompanyORM.location == location)

        q = q.order_by(CompanyORM.name.asc(), CompanyORM.id.asc()).offset(offset).limit(limit)
        return [_to_response(r) for r in self.db.scalars(q).all()]

    def create(self, data: CompanyCreate) -> CompanyResponse:
        now = datetime.now(timezone.utc)
        orm = CompanyORM(
            name=data.name,
            ai_tools_delivered=encode_labels(data.ai_tools_delivered),
            additional_sign_ups=encode_labels(data.additional_sign_ups),
            resources_sent=encode_labels(data.resources_sent),
            created_at=now,
            updated_at=now,
        )
        for k in PLAIN_FIELDS:
            setattr(orm, k, getattr(data, k))

        self.db.add(orm)
        # company and tag links are committed together
        self.db.flush()
        self._link_tags(orm.id, data.tag_ids)
        self.db.commit()
        self.db.refresh(orm)
        return _to_response(orm)

    def update(self, company_id: int, data: CompanyUpdate) -> CompanyResponse | None:
        orm = self.db.get(CompanyORM, company_id)
        if not orm:
            return None

        patch = data.model_dump(exclude_unset=True, by_alias=False)

        if patch.get("name") is not None:
            orm.name = patch["name"]
        for k in LABEL_FIELDS:
            if k in patch:
                setattr(orm, k, encode_labels(patch[k]))
        for k in PLAIN_FIELDS:
            if k in patch:
                setattr(orm, k, patch[k])

        if "tag_ids" in patch:
            self.db.query(CompanyTagORM).filter(CompanyTagORM.company_id == company_id).delete(
                synchronize_session=False
            )
            self._link_tags(company_id, patch["tag_ids"] or [])

        orm.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(orm)
        return _to_response(orm)

    def delete(self, company_id: int) -> bool:
        orm = self.db.get(CompanyORM, company_id)
        if not orm:
            return False
        # engagements, activities, files and tag links go with it (ON DELETE CASCADE)
        self.db.delete(orm)
        self.db.commit()
        return True

    def _link_tags(self, company_id: int, tag_ids: list[int]) -> None:
        seen: set[int] = set()
        for tag_id in tag_ids:
            if tag_id in seen:
                continue
            seen.add(tag_id)
            self.db.add(CompanyTagORM(company_id=company_id, tag_id=tag_id))
        self.db.flush()
