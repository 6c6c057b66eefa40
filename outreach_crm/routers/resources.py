"""Resources router, including distribution to companies and tags."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.core.errors import NotFoundError
from outreach_crm.core.ids import parse_id
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.resource_repository_sqlalchemy import ResourceRepositorySQLAlchemy
from outreach_crm.schemas.resource import (
    DistributionRequest,
    DistributionResponse,
    DistributionResult,
    ResourceCreate,
    ResourceResponse,
    ResourceUpdate,
)
from outreach_crm.services.distribution_service import DistributionService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_user)])


# ============================================================================
# Static path endpoints MUST be defined before dynamic path endpoints
# ============================================================================


@router.post(
    "/resources/distribute",
    response_model=DistributionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Distribute a resource",
    description="Send a resource to companies directly and/or to every company carrying a tag.",
    responses={
        400: {"description": "Neither companyIds nor tagIds provided"},
        404: {"description": "Resource not found"},
    },
)
def distribute_resource(
    payload: DistributionRequest, db: Session = Depends(get_db)
) -> DistributionResult:
    """Create one distribution record per recipient company.

    A company reached both directly and through a tag gets a single record
    carrying the tag.
    """
    service = DistributionService(db)
    distributions = service.distribute(payload.resource_id, payload.company_ids, payload.tag_ids)
    return DistributionResult(
        message=f"Resource distributed to {len(distributions)} recipients",
        distributions=distributions,
    )


@router.get(
    "/resources",
    response_model=list[ResourceResponse],
    status_code=status.HTTP_200_OK,
    summary="List resources",
)
def list_resources(db: Session = Depends(get_db)) -> list[ResourceResponse]:
    return ResourceRepositorySQLAlchemy(db).list()


@router.post(
    "/resources",
    response_model=ResourceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a resource",
    responses={400: {"description": "Missing required fields"}},
)
def create_resource(payload: ResourceCreate, db: Session = Depends(get_db)) -> ResourceResponse:
    resource = ResourceRepositorySQLAlchemy(db).create(payload)
    logger.info(f"[API] POST /resources created {resource.id} ({resource.type})")
    return resource


@router.get(
    "/resources/{resource_id}",
    response_model=ResourceResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a resource",
    responses={404: {"description": "Resource not found"}},
)
def get_resource(
    resource_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> ResourceResponse:
    resource = ResourceRepositorySQLAlchemy(db).get(parse_id(resource_id, "resource"))
    if not resource:
        raise NotFoundError("resource")
    return resource


@router.put(
    "/resources/{resource_id}",
    response_model=ResourceResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a resource",
    description="Fields missing from the payload keep their stored values.",
    responses={404: {"description": "Resource not found"}},
)
def update_resource(
    resource_id: Annotated[str, Path(min_length=1)],
    payload: ResourceUpdate,
    db: Session = Depends(get_db),
) -> ResourceResponse:
    updated = ResourceRepositorySQLAlchemy(db).update(parse_id(resource_id, "resource"), payload)
    if not updated:
        raise NotFoundError("resource")
    return updated


@router.delete(
    "/resources/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a resource",
    responses={404: {"description": "Resource not found"}},
)
def delete_resource(
    resource_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> None:
    if not ResourceRepositorySQLAlchemy(db).delete(parse_id(resource_id, "resource")):
        raise NotFoundError("resource")


@router.get(
    "/resources/{resource_id}/distributions",
    response_model=list[DistributionResponse],
    status_code=status.HTTP_200_OK,
    summary="List a resource's distributions",
    responses={404: {"description": "Resource not found"}},
)
def list_resource_distributions(
    resource_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> list[DistributionResponse]:
    repo = ResourceRepositorySQLAlchemy(db)
    rid = parse_id(resource_id, "resource")
    if not repo.exists(rid):
        raise NotFoundError("resource")
    return repo.list_distributions(rid)
