from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach_crm.core.labels import encode_labels
from outreach_crm.db.models import EngagementORM, FollowUpActionORM
from outreach_crm.schemas.engagement import (
    EngagementCreate,
    EngagementResponse,
    EngagementUpdate,
    FollowUpActionIn,
)


def _build_follow_ups(items: list[FollowUpActionIn]) -> list[FollowUpActionORM]:
    now = datetime.now(timezone.utc)
    return [
        FollowUpActionORM(
            task=item.task,
            due_date=item.due_date,
            completed=item.completed,
            created_at=now,
            updated_at=now,
        )
        for item in items
    ]


class EngagementRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def get(self, engagement_id: int) -> EngagementResponse | None:
        orm = self.db.get(EngagementORM, engagement_id)
        return self._to_model(orm) if orm else None

    def list_for_company(self, company_id: int) -> list[EngagementResponse]:
        rows = self.db.scalars(
            select(EngagementORM)
            .where(EngagementORM.company_id == company_id)
            .order_by(EngagementORM.date_of_contact.desc().nullslast(), EngagementORM.id.desc())
        ).all()
        return [self._to_model(r) for r in rows]

    def create(self, data: EngagementCreate) -> EngagementResponse:
        now = datetime.now(timezone.utc)
        orm = EngagementORM(
            company_id=data.company_id,
            date_of_contact=data.date_of_contact,
            ai_training_delivered=encode_labels(data.ai_training_delivered),
            notes=data.notes,
            status=data.status,
            created_at=now,
            updated_at=now,
        )
        orm.follow_ups = _build_follow_ups(data.follow_ups)

        # engagement and its follow-ups are committed together
        self.db.add(orm)
        self.db.commit()
        self.db.refresh(orm)
        return self._to_model(orm)

    def update(self, engagement_id: int, data: EngagementUpdate) -> EngagementResponse | None:
        orm = self.db.get(EngagementORM, engagement_id)
        if not orm:
            return None

        patch = data.model_dump(exclude_unset=True, by_alias=False)

        for k in ["date_of_contact", "notes", "status"]:
            if k in patch:
                setattr(orm, k, patch[k])
        if "ai_training_delivered" in patch:
            orm.ai_training_delivered = encode_labels(patch["ai_training_delivered"])
        if "follow_ups" in patch:
            # delete-orphan removes the previous follow-ups
            orm.follow_ups = _build_follow_ups(data.follow_ups or [])

        orm.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(orm)
        return self._to_model(orm)

    def delete(self, engagement_id: int) -> bool:
        orm = self.db.get(EngagementORM, engagement_id)
        if not orm:
            return False
        self.db.delete(orm)
        self.db.commit()
        return True

    def _to_model(self, orm: EngagementORM) -> EngagementResponse:
        return EngagementResponse.model_validate(orm)
