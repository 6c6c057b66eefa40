from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from outreach_crm.db.models import ResourceDistributionORM, ResourceORM
from outreach_crm.schemas.resource import (
    DistributionResponse,
    ResourceCreate,
    ResourceResponse,
    ResourceUpdate,
)


class ResourceRepositorySQLAlchemy:
    def __init__(self, db: Session):
        self.db = db

    def exists(self, resource_id: int) -> bool:
        return self.db.get(ResourceORM, resource_id) is not None

    def get(self, resource_id: int) -> ResourceResponse | None:
        orm = self.db.get(ResourceORM, resource_id)
        return ResourceResponse.model_validate(orm) if orm else None

    def list(self) -> list[ResourceResponse]:
        rows = self.db.scalars(
            select(ResourceORM).order_by(ResourceORM.created_at.asc(), ResourceORM.id.asc())
        ).all()
        return [ResourceResponse.model_validate(r) for r in rows]

    def create(self, data: ResourceCreate) -> ResourceResponse:
        now = datetime.now(timezone.utc)
        orm = ResourceORM(
            title=data.title,
            type=data.type,
            description=data.description,
            link=data.link,
            created_at=now,
            updated_at=now,
        )
        self.db.add(orm)
        self.db.commit()
        self.db.refresh(orm)
        return ResourceResponse.model_validate(orm)

    def update(self, resource_id: int, data: ResourceUpdate) -> ResourceResponse | None:
        orm = self.db.get(ResourceORM, resource_id)
        if not orm:
            return None

        patch = data.model_dump(exclude_unset=True, by_alias=False)

        # required columns ignore explicit nulls
        for k in ["title", "type", "link"]:
            if patch.get(k) is not None:
                setattr(orm, k, patch[k])
        if "description" in patch:
            orm.description = patch["description"]

        orm.updated_at = datetime.now(timezone.utc)

        self.db.commit()
        self.db.refresh(orm)
        return ResourceResponse.model_validate(orm)

    def delete(self, resource_id: int) -> bool:
        orm = self.db.get(ResourceORM, resource_id)
        if not orm:
            return False
        self.db.delete(orm)
        self.db.commit()
        return True

    def create_distributions(self, rows: list[dict]) -> list[DistributionResponse]:
        """Insert distribution rows as one batch in a single transaction."""
        now = datetime.now(timezone.utc)
        orms = [
            ResourceDistributionORM(
                resource_id=row["resource_id"],
                company_id=row.get("company_id"),
                tag_id=row.get("tag_id"),
                date_sent=now,
                clicks=0,
                created_at=now,
                updated_at=now,
            )
            for row in rows
        ]
        self.db.add_all(orms)
        self.db.commit()
        for orm in orms:
            self.db.refresh(orm)
        return [DistributionResponse.model_validate(o) for o in orms]

    def list_distributions(self, resource_id: int) -> list[DistributionResponse]:
        rows = self.db.scalars(
            select(ResourceDistributionORM)
            .where(ResourceDistributionORM.resource_id == resource_id)
            .order_by(ResourceDistributionORM.id.asc())
        ).all()
        return [DistributionResponse.model_validate(r) for r in rows]
