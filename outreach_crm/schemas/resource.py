from datetime import datetime

from pydantic import Field, model_validator

from outreach_crm.core.ids import SafeId, SafeIdList
from outreach_crm.models import CamelModel, NonBlankStr, unwrap_envelope


class ResourceCreate(CamelModel):
    title: NonBlankStr = Field(..., max_length=300)
    type: NonBlankStr = Field(..., max_length=100)
    description: str | None = None
    link: NonBlankStr

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "resource")


class ResourceUpdate(CamelModel):
    """Fields left out of the payload keep their stored values."""

    title: NonBlankStr | None = Field(default=None, max_length=300)
    type: NonBlankStr | None = Field(default=None, max_length=100)
    description: str | None = None
    link: NonBlankStr | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "resource")


class ResourceResponse(CamelModel):
    id: SafeId
    title: str
    type: str
    description: str | None = None
    link: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DistributionRequest(CamelModel):
    resource_id: SafeId
    company_ids: SafeIdList | None = None
    tag_ids: SafeIdList | None = None


class DistributionResponse(CamelModel):
    id: SafeId
    resource_id: SafeId
    company_id: SafeId | None = None
    tag_id: SafeId | None = None
    date_sent: datetime | None = None
    clicks: int = 0
    created_at: datetime | None = None


class DistributionResult(CamelModel):
    message: str
    distributions: list[DistributionResponse]
