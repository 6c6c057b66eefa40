from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach_crm.db.models import AdditionalActivityORM
from outreach_crm.schemas.activity import ActivityCreate, ActivityResponse, ActivityUpdate

FLAG_FIELDS = ("additional_courses", "t_levels", "apprenticeships")


class ActivityRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def get(self, activity_id: int) -> ActivityResponse | None:
        orm = self.db.get(AdditionalActivityORM, activity_id)
        return ActivityResponse.model_validate(orm) if orm else None

    def list_for_company(self, company_id: int) -> list[ActivityResponse]:
        rows = self.db.scalars(
            select(AdditionalActivityORM)
            .where(AdditionalActivityORM.company_id == company_id)
            .order_by(AdditionalActivityORM.id.asc())
        ).all()
        return [ActivityResponse.model_validate(r) for r in rows]

    def create(self, data: ActivityCreate) -> ActivityResponse:
        now = datetime.now(timezone.utc)
        orm = AdditionalActivityORM(
            company_id=data.company_id,
            additional_courses=data.additional_courses,
            t_levels=data.t_levels,
            apprenticeships=data.apprenticeships,
            details=data.details,
            number_of_learners=data.number_of_learners,
            total_value=data.total_value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(orm)
        self.db.commit()
        self.db.refresh(orm)
        return ActivityResponse.model_validate(orm)

    def update(self, activity_id: int, data: ActivityUpdate) -> ActivityResponse | None:
        orm = self.db.get(AdditionalActivityORM, activity_id)
        if not orm:
            return None

        patch = data.model_dump(exclude_unset=True, by_alias=False)

        for k in FLAG_FIELDS:
            if k in patch:
                setattr(orm, k, bool(patch[k]))
        for k in ["details", "number_of_learners", "total_value"]:
            if k in patch:
                setattr(orm, k, patch[k])

        orm.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(orm)
        return ActivityResponse.model_validate(orm)

    def delete(self, activity_id: int) -> bool:
        orm = self.db.get(AdditionalActivityORM, activity_id)
        if not orm:
            return False
        self.db.delete(orm)
        self.db.commit()
        return True
