from datetime import date
from decimal import Decimal

from pydantic import Field

from outreach_crm.core.ids import SafeId
from outreach_crm.models import CamelModel
from outreach_crm.schemas.company import CompanyResponse


class UpcomingTask(CamelModel):
    id: SafeId
    engagement_id: SafeId
    task: str
    due_date: date | None = None
    completed: bool


class StatusCount(CamelModel):
    status: str | None = None
    count: int


class DashboardResponse(CamelModel):
    companies_count: int
    engagements_count: int
    upcoming_tasks: list[UpcomingTask] = Field(default_factory=list)
    total_value: Decimal = Decimal("0")
    recent_companies: list[CompanyResponse] = Field(default_factory=list)
    resources_distributed_count: int
    engagement_status_counts: list[StatusCount] = Field(default_factory=list)
