from datetime import datetime
from decimal import Decimal

from pydantic import Field, model_validator

from outreach_crm.core.ids import SafeId, SafeIdList
from outreach_crm.core.labels import LabelList
from outreach_crm.models import CamelModel, Money, NonBlankStr, unwrap_envelope
from outreach_crm.schemas.activity import ActivityResponse
from outreach_crm.schemas.engagement import EngagementResponse
from outreach_crm.schemas.file import FileResponse
from outreach_crm.schemas.tag import TagResponse

_SIBLINGS = ("tagIds", "tag_ids")


class CompanyCreate(CamelModel):
    name: NonBlankStr = Field(..., max_length=300)
    industry: str | None = None
    location: str | None = None
    sector: str | None = None
    contact_name: str | None = None
    contact_role: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    social_media: str | None = None
    ai_tools_delivered: LabelList = Field(default_factory=list)
    additional_sign_ups: LabelList = Field(default_factory=list)
    resources_sent: LabelList = Field(default_factory=list)
    value_to_college: Money | None = None
    engagement_notes: str | None = None
    tag_ids: SafeIdList = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "company", _SIBLINGS)


class CompanyUpdate(CamelModel):
    """Fields left out of the payload keep their stored values.

    ``tag_ids`` replaces the company's tag links when present.
    """

    name: NonBlankStr | None = Field(default=None, max_length=300)
    industry: str | None = None
    location: str | None = None
    sector: str | None = None
    contact_name: str | None = None
    contact_role: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    social_media: str | None = None
    ai_tools_delivered: LabelList | None = None
    additional_sign_ups: LabelList | None = None
    resources_sent: LabelList | None = None
    value_to_college: Money | None = None
    engagement_notes: str | None = None
    tag_ids: SafeIdList | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "company", _SIBLINGS)


class CompanyResponse(CamelModel):
    id: SafeId
    name: str
    industry: str | None = None
    location: str | None = None
    sector: str | None = None
    contact_name: str | None = None
    contact_role: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    social_media: str | None = None
    ai_tools_delivered: LabelList = Field(default_factory=list)
    additional_sign_ups: LabelList = Field(default_factory=list)
    resources_sent: LabelList = Field(default_factory=list)
    value_to_college: Decimal | None = None
    engagement_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompanyDetailResponse(CompanyResponse):
    tags: list[TagResponse] = Field(default_factory=list)
    engagements: list[EngagementResponse] = Field(default_factory=list)
    activities: list[ActivityResponse] = Field(default_factory=list)
    files: list[FileResponse] = Field(default_factory=list)
