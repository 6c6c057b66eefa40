"""Resource distribution fan-out.

A resource can be sent to companies directly, or to every company carrying a
tag. One invocation produces at most one distribution row per company: a
company reached both directly and through a tag (or through several tags) gets
a single row annotated with the tag that reached it.
"""

import logging
from typing import Callable, Iterable

from sqlalchemy.orm import Session

from outreach_crm.core.errors import BadRequestError, NotFoundError
from outreach_crm.repositories.resource_repository_sqlalchemy import ResourceRepositorySQLAlchemy
from outreach_crm.repositories.tag_repository_sqlalchemy import TagRepositorySQLAlchemy
from outreach_crm.schemas.resource import DistributionResponse

logger = logging.getLogger(__name__)


def plan_distributions(
    resource_id: int,
    company_ids: Iterable[int],
    tag_ids: Iterable[int],
    resolve_tag: Callable[[int], Iterable[int]],
) -> list[dict]:
    """Build the distribution rows for one send.

    Args:
        resource_id: Resource being distributed.
        company_ids: Companies targeted directly.
        tag_ids: Tags whose member companies are targeted.
        resolve_tag: Returns the IDs of the companies currently linked to a tag.

    Returns:
        Row dicts with ``resource_id``, ``company_id`` and ``tag_id`` keys, in
        first-reached order. ``tag_id`` is None for direct-only recipients and
        holds the last tag that reached the company otherwise.
    """
    rows: dict[int, dict] = {}

    for company_id in company_ids:
        if company_id not in rows:
            rows[company_id] = {
                "resource_id": resource_id,
                "company_id": company_id,
                "tag_id": None,
            }

    for tag_id in tag_ids:
        for company_id in resolve_tag(tag_id):
            existing = rows.get(company_id)
            if existing is None:
                rows[company_id] = {
                    "resource_id": resource_id,
                    "company_id": company_id,
                    "tag_id": tag_id,
                }
            else:
                existing["tag_id"] = tag_id

    return list(rows.values())


class DistributionService:
    """Distributes a resource to companies and tag members in one batch."""

    def __init__(self, db: Session) -> None:
        self.resources = ResourceRepositorySQLAlchemy(db)
        self.tags = TagRepositorySQLAlchemy(db)

    def distribute(
        self,
        resource_id: int,
        company_ids: list[int] | None = None,
        tag_ids: list[int] | None = None,
    ) -> list[DistributionResponse]:
        """Plan and insert distribution rows.

        Raises:
            BadRequestError: neither companies nor tags were given.
            NotFoundError: the resource does not exist.
        """
        company_ids = company_ids or []
        tag_ids = tag_ids or []

        if not company_ids and not tag_ids:
            raise BadRequestError(
                "Either company IDs or tag IDs must be provided",
                code="DISTRIBUTION_TARGET_REQUIRED",
            )
        if not self.resources.exists(resource_id):
            raise NotFoundError("resource")

        rows = plan_distributions(
            resource_id, company_ids, tag_ids, self.tags.company_ids_for_tag
        )
        logger.info(
            f"Distributing resource {resource_id}: {len(company_ids)} companies, "
            f"{len(tag_ids)} tags -> {len(rows)} recipients"
        )
        if not rows:
            return []
        return self.resources.create_distributions(rows)
