"""Additional learning activities router."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.core.errors import BadRequestError, NotFoundError
from outreach_crm.core.ids import parse_id
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.activity_repository_sqlalchemy import ActivityRepositorySQLAlchemy
from outreach_crm.repositories.company_repository_sqlalchemy import CompanyRepositorySQLAlchemy
from outreach_crm.schemas.activity import ActivityCreate, ActivityResponse, ActivityUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_user)])


@router.get(
    "/activities",
    response_model=list[ActivityResponse],
    status_code=status.HTTP_200_OK,
    summary="List a company's additional activities",
)
def list_activities(
    company_id: Annotated[str | None, Query(alias="companyId")] = None,
    db: Session = Depends(get_db),
) -> list[ActivityResponse]:
    if not company_id:
        raise BadRequestError("Company ID is required", code="MISSING_COMPANY_ID")
    repo = ActivityRepositorySQLAlchemy(db)
    return repo.list_for_company(parse_id(company_id, "company"))


@router.post(
    "/activities",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an additional activity",
    responses={404: {"description": "Company not found"}},
)
def create_activity(payload: ActivityCreate, db: Session = Depends(get_db)) -> ActivityResponse:
    if not CompanyRepositorySQLAlchemy(db).exists(payload.company_id):
        raise NotFoundError("company")

    activity = ActivityRepositorySQLAlchemy(db).create(payload)
    logger.info(f"[API] POST /activities created {activity.id} for company {payload.company_id}")
    return activity


@router.get(
    "/activities/{activity_id}",
    response_model=ActivityResponse,
    status_code=status.HTTP_200_OK,
    summary="Get an activity",
    responses={404: {"description": "Activity not found"}},
)
def get_activity(
    activity_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> ActivityResponse:
    activity = ActivityRepositorySQLAlchemy(db).get(parse_id(activity_id, "activity"))
    if not activity:
        raise NotFoundError("activity")
    return activity


@router.put(
    "/activities/{activity_id}",
    response_model=ActivityResponse,
    status_code=status.HTTP_200_OK,
    summary="Update an activity",
    responses={404: {"description": "Activity not found"}},
)
def update_activity(
    activity_id: Annotated[str, Path(min_length=1)],
    payload: ActivityUpdate,
    db: Session = Depends(get_db),
) -> ActivityResponse:
    updated = ActivityRepositorySQLAlchemy(db).update(parse_id(activity_id, "activity"), payload)
    if not updated:
        raise NotFoundError("activity")
    return updated


@router.delete(
    "/activities/{activity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an activity",
    responses={404: {"description": "Activity not found"}},
)
def delete_activity(
    activity_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> None:
    if not ActivityRepositorySQLAlchemy(db).delete(parse_id(activity_id, "activity")):
        raise NotFoundError("activity")
