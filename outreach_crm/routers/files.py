"""Files router.

Files are registered by URL once uploaded to storage; they may be attached to
a company or stand alone.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from outreach_crm.auth.deps import require_user
from outreach_crm.core.errors import NotFoundError
from outreach_crm.core.ids import parse_id
from outreach_crm.db.deps import get_db
from outreach_crm.repositories.company_repository_sqlalchemy import CompanyRepositorySQLAlchemy
from outreach_crm.repositories.file_repository_sqlalchemy import FileRepositorySQLAlchemy
from outreach_crm.schemas.file import FileCreate, FileResponse

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_user)])


@router.get(
    "/files",
    response_model=list[FileResponse],
    status_code=status.HTTP_200_OK,
    summary="List files",
    description="Newest first, optionally limited to one company.",
)
def list_files(
    company_id: Annotated[str | None, Query(alias="companyId")] = None,
    db: Session = Depends(get_db),
) -> list[FileResponse]:
    repo = FileRepositorySQLAlchemy(db)
    cid = parse_id(company_id, "company") if company_id else None
    return repo.list(company_id=cid)


@router.post(
    "/files",
    response_model=FileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a file",
    responses={404: {"description": "Company not found"}},
)
def create_file(payload: FileCreate, db: Session = Depends(get_db)) -> FileResponse:
    if payload.company_id is not None and not CompanyRepositorySQLAlchemy(db).exists(
        payload.company_id
    ):
        raise NotFoundError("company")

    created = FileRepositorySQLAlchemy(db).create(payload)
    logger.info(f"[API] POST /files registered {created.id} ({created.name})")
    return created


@router.get(
    "/files/{file_id}",
    response_model=FileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a file",
    responses={404: {"description": "File not found"}},
)
def get_file(
    file_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> FileResponse:
    found = FileRepositorySQLAlchemy(db).get(parse_id(file_id, "file"))
    if not found:
        raise NotFoundError("file")
    return found


@router.delete(
    "/files/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a file",
    responses={404: {"description": "File not found"}},
)
def delete_file(
    file_id: Annotated[str, Path(min_length=1)],
    db: Session = Depends(get_db),
) -> None:
    if not FileRepositorySQLAlchemy(db).delete(parse_id(file_id, "file")):
        raise NotFoundError("file")
