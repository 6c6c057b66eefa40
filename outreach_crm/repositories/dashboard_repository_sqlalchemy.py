from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from outreach_crm.db.models import (
    AdditionalActivityORM,
    CompanyORM,
    EngagementORM,
    FollowUpActionORM,
    ResourceDistributionORM,
)
from outreach_crm.schemas.company import CompanyResponse
from outreach_crm.schemas.dashboard import DashboardResponse, StatusCount, UpcomingTask

UPCOMING_TASK_LIMIT = 5
RECENT_COMPANY_LIMIT = 5


class DashboardRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def _count(self, model) -> int:
        return self.db.scalar(select(func.count()).select_from(model)) or 0

    def summary(self, today: date | None = None) -> DashboardResponse:
        today = today or date.today()

        upcoming = self.db.scalars(
            select(FollowUpActionORM)
            .where(FollowUpActionORM.completed.is_(False))
            .where(FollowUpActionORM.due_date > today)
            .order_by(FollowUpActionORM.due_date.asc(), FollowUpActionORM.id.asc())
            .limit(UPCOMING_TASK_LIMIT)
        ).all()

        total_value = self.db.scalar(
            select(func.coalesce(func.sum(AdditionalActivityORM.total_value), 0))
        )

        recent = self.db.scalars(
            select(CompanyORM)
            .order_by(CompanyORM.created_at.desc(), CompanyORM.id.desc())
            .limit(RECENT_COMPANY_LIMIT)
        ).all()

        status_rows = self.db.execute(
            select(EngagementORM.status, func.count())
            .group_by(EngagementORM.status)
            .order_by(EngagementORM.status.asc())
        ).all()

        return DashboardResponse(
            companies_count=self._count(CompanyORM),
            engagements_count=self._count(EngagementORM),
            upcoming_tasks=[UpcomingTask.model_validate(t) for t in upcoming],
            total_value=total_value or 0,
            recent_companies=[CompanyResponse.model_validate(c) for c in recent],
            resources_distributed_count=self._count(ResourceDistributionORM),
            engagement_status_counts=[
                StatusCount(status=status, count=count) for status, count in status_rows
            ],
        )
