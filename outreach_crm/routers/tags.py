"""Tags router."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.tag_repository_sqlalchemy import TagRepositorySQLAlchemy
from outreach_crm.schemas.tag import TagCreate, TagResponse

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_user)])


@router.get(
    "/tags",
    response_model=list[TagResponse],
    status_code=status.HTTP_200_OK,
    summary="List tags",
)
def list_tags(
    tag_type: Annotated[str | None, Query(alias="type", description="e.g. Sector, Location")] = None,
    db: Session = Depends(get_db),
) -> list[TagResponse]:
    return TagRepositorySQLAlchemy(db).list(tag_type=tag_type)


@router.post(
    "/tags",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a tag",
    responses={400: {"description": "Tag name and type are required"}},
)
def create_tag(payload: TagCreate, db: Session = Depends(get_db)) -> TagResponse:
    tag = TagRepositorySQLAlchemy(db).create(payload)
    logger.info(f"[API] POST /tags created {tag.id} ({tag.type}: {tag.name})")
    return tag
