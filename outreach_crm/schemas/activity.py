from datetime import datetime
from decimal import Decimal

from pydantic import Field, model_validator

from outreach_crm.core.ids import SafeId
from outreach_crm.models import CamelModel, Money, unwrap_envelope


class ActivityCreate(CamelModel):
    company_id: SafeId
    additional_courses: bool = False
    t_levels: bool = False
    apprenticeships: bool = False
    details: str | None = None
    number_of_learners: int | None = Field(default=None, ge=0)
    total_value: Money | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "activity")


class ActivityUpdate(CamelModel):
    """Fields left out of the payload keep their stored values."""

    additional_courses: bool | None = None
    t_levels: bool | None = None
    apprenticeships: bool | None = None
    details: str | None = None
    number_of_learners: int | None = Field(default=None, ge=0)
    total_value: Money | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "activity")


class ActivityResponse(CamelModel):
    id: SafeId
    company_id: SafeId
    additional_courses: bool
    t_levels: bool
    apprenticeships: bool
    details: str | None = None
    number_of_learners: int | None = None
    total_value: Decimal | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
