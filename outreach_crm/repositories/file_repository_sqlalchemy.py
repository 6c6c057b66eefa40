from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from outreach_crm.db.models import FileORM
from outreach_crm.schemas.file import FileCreate, FileResponse


class FileRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def get(self, file_id: int) -> FileResponse | None:
        orm = self.db.get(FileORM, file_id)
        return FileResponse.model_validate(orm) if orm else None

    def list(self, *, company_id: int | None = None) -> list[FileResponse]:
        q = self.db.query(FileORM)
        if company_id is not None:
            q = q.filter(FileORM.company_id == company_id)

        q = q.order_by(FileORM.created_at.desc(), FileORM.id.desc())
        return [FileResponse.model_validate(r) for r in q.all()]

    def create(self, data: FileCreate) -> FileResponse:
        orm = FileORM(
            company_id=data.company_id,
            name=data.name,
            type=data.type,
            url=data.url,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(orm)
        self.db.commit()
        self.db.refresh(orm)
        return FileResponse.model_validate(orm)

    def delete(self, file_id: int) -> bool:
        orm = self.db.get(FileORM, file_id)
        if not orm:
            return False
        self.db.delete(orm)
        self.db.commit()
        return True
