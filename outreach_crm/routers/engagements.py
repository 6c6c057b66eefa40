"""Engagements router.

Engagements are contact events with a company; each carries its follow-up
actions, which are written together with the engagement.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.core.errors import BadRequestError, NotFoundError
from outreach_crm.core.ids import parse_id
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.company_repository_sqlalchemy import CompanyRepositorySQLAlchemy
from outreach_crm.repositories.engagement_repository_sqlalchemy import (
    EngagementRepositorySQLAlchemy,
)
from outreach_crm.schemas.engagement import (
    EngagementCreate,
    EngagementResponse,
    EngagementUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_user)])


@router.get(
    "/engagements",
    response_model=list[EngagementResponse],
    status_code=status.HTTP_200_OK,
    summary="List a company's engagements",
    responses={400: {"description": "Missing or invalid companyId"}},
)
def list_engagements(
    company_id: Annotated[str | None, Query(alias="companyId")] = None,
    db: Session = Depends(get_db),
) -> list[EngagementResponse]:
    if not company_id:
        raise BadRequestError("Company ID is required", code="MISSING_COMPANY_ID")
    repo = EngagementRepositorySQLAlchemy(db)
    return repo.list_for_company(parse_id(company_id, "company"))


@router.post(
    "/engagements",
    response_model=EngagementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an engagement",
    responses={404: {"description": "Company not found"}},
)
def create_engagement(
    payload: EngagementCreate, db: Session = Depends(get_db)
) -> EngagementResponse:
    """Create an engagement and its follow-up actions atomically.

    Raises:
        ApiError: 404 ``COMPANY_NOT_FOUND`` if the company does not exist.
    """
    if not CompanyRepositorySQLAlchemy(db).exists(payload.company_id):
        raise NotFoundError("company")

    repo = EngagementRepositorySQLAlchemy(db)
    engagement = repo.create(payload)
    logger.info(
        f"[API] POST /engagements created {engagement.id} for company {payload.company_id} "
        f"with {len(engagement.follow_ups)} follow-ups"
    )
    return engagement


@router.get(
    "/engagements/{engagement_id}",
    response_model=EngagementResponse,
    status_code=status.HTTP_200_OK,
    summary="Get an engagement with its follow-ups",
    responses={404: {"description": "Engagement not found"}},
)
def get_engagement(
    engagement_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> EngagementResponse:
    repo = EngagementRepositorySQLAlchemy(db)
    engagement = repo.get(parse_id(engagement_id, "engagement"))
    if not engagement:
        raise NotFoundError("engagement")
    return engagement


@router.put(
    "/engagements/{engagement_id}",
    response_model=EngagementResponse,
    status_code=status.HTTP_200_OK,
    summary="Update an engagement",
    description="Fields missing from the payload keep their stored values.",
    responses={404: {"description": "Engagement not found"}},
)
def update_engagement(
    engagement_id: Annotated[str, Path(min_length=1)],
    payload: EngagementUpdate,
    db: Session = Depends(get_db),
) -> EngagementResponse:
    """Update an engagement.

    A ``followUps`` list in the payload replaces the stored follow-ups; without
    it they are left unchanged.
    """
    repo = EngagementRepositorySQLAlchemy(db)
    updated = repo.update(parse_id(engagement_id, "engagement"), payload)
    if not updated:
        raise NotFoundError("engagement")
    logger.info(f"[API] PUT /engagements/{updated.id}")
    return updated


@router.delete(
    "/engagements/{engagement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an engagement",
    responses={404: {"description": "Engagement not found"}},
)
def delete_engagement(
    engagement_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> None:
    repo = EngagementRepositorySQLAlchemy(db)
    if not repo.delete(parse_id(engagement_id, "engagement")):
        raise NotFoundError("engagement")
