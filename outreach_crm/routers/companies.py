"""Companies router.

Company CRUD plus the detail view that joins tags, engagements, activities and
files.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.core.errors import NotFoundError
from outreach_crm.core.ids import parse_id, parse_id_list
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.company_repository_sqlalchemy import CompanyRepositorySQLAlchemy
from outreach_crm.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_user)])


@router.get(
    "/companies",
    response_model=list[CompanyResponse],
    status_code=status.HTTP_200_OK,
    summary="List companies",
    description="List companies, optionally filtered by name, tags, industry, sector and location.",
)
def list_companies(
    search: Annotated[str | None, Query(description="Case-insensitive name substring")] = None,
    tag_ids: Annotated[str | None, Query(alias="tagIds", description="Comma-separated tag IDs")] = None,
    industry: Annotated[str | None, Query(alias="industryFilter")] = None,
    sector: Annotated[str | None, Query(alias="sectorFilter")] = None,
    location: Annotated[str | None, Query(alias="locationFilter")] = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
    db: Session = Depends(get_db),
) -> list[CompanyResponse]:
    """List companies with filters and pagination.

    Filters combine with AND. ``tagIds`` matches companies carrying any of the
    given tags.
    """
    repo = CompanyRepositorySQLAlchemy(db)
    return repo.list(
        search=search,
        tag_ids=parse_id_list(tag_ids, "tag"),
        industry=industry,
        sector=sector,
        location=location,
        limit=limit,
        offset=offset,
    )


@router.post(
    "/companies",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
    responses={400: {"description": "Invalid company data or unknown tag"}},
)
def create_company(payload: CompanyCreate, db: Session = Depends(get_db)) -> CompanyResponse:
    """Create a company and link it to ``tagIds`` in one transaction."""
    repo = CompanyRepositorySQLAlchemy(db)
    company = repo.create(payload)
    logger.info(f"[API] POST /companies created {company.id} with {len(payload.tag_ids)} tags")
    return company


@router.get(
    "/companies/{company_id}",
    response_model=CompanyDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get company by ID",
    description="Company record with its tags, engagements, activities and files.",
    responses={
        400: {"description": "Invalid company ID format"},
        404: {"description": "Company not found"},
    },
)
def get_company(
    company_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> CompanyDetailResponse:
    repo = CompanyRepositorySQLAlchemy(db)
    company = repo.get_detail(parse_id(company_id, "company"))
    if not company:
        raise NotFoundError("company")
    return company


@router.put(
    "/companies/{company_id}",
    response_model=CompanyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a company",
    description="Fields missing from the payload keep their stored values.",
    responses={
        400: {"description": "Invalid company ID format"},
        404: {"description": "Company not found"},
    },
)
def update_company(
    company_id: Annotated[str, Path(min_length=1)],
    payload: CompanyUpdate,
    db: Session = Depends(get_db),
) -> CompanyResponse:
    """Update a company.

    If ``tagIds`` is present the company's tag links are replaced with it.

    Raises:
        ApiError: 400 for an invalid ID, 404 if the company does not exist.
    """
    repo = CompanyRepositorySQLAlchemy(db)
    updated = repo.update(parse_id(company_id, "company"), payload)
    if not updated:
        raise NotFoundError("company")
    logger.info(f"[API] PUT /companies/{updated.id}")
    return updated


@router.delete(
    "/companies/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a company",
    description="Deletes the company with its engagements, activities, files and tag links.",
    responses={
        400: {"description": "Invalid company ID format"},
        404: {"description": "Company not found"},
    },
)
def delete_company(
    company_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> None:
    repo = CompanyRepositorySQLAlchemy(db)
    cid = parse_id(company_id, "company")
    if not repo.delete(cid):
        raise NotFoundError("company")
    logger.info(f"[API] DELETE /companies/{cid}")
