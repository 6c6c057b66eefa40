"""Dashboard router: aggregate counts and recent records."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.dashboard_repository_sqlalchemy import (
    DashboardRepositorySQLAlchemy,
)
from outreach_crm.schemas.dashboard import DashboardResponse

router = APIRouter(dependencies=[Depends(require_user)])


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Dashboard summary",
)
def get_dashboard(db: Session = Depends(get_db)) -> DashboardResponse:
    """Counts, total activity value, upcoming follow-ups and newest companies."""
    return DashboardRepositorySQLAlchemy(db).summary()
