from datetime import date, datetime

from pydantic import Field, model_validator

from outreach_crm.core.ids import SafeId
from outreach_crm.core.labels import LabelList
from outreach_crm.models import CamelModel, NonBlankStr, OptionalDate, unwrap_envelope

_SIBLINGS = ("followUps", "follow_ups")


class FollowUpActionIn(CamelModel):
    task: NonBlankStr
    due_date: OptionalDate = None
    completed: bool = False


class FollowUpActionResponse(CamelModel):
    id: SafeId
    engagement_id: SafeId
    task: str
    due_date: date | None = None
    completed: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EngagementCreate(CamelModel):
    company_id: SafeId
    date_of_contact: OptionalDate = None
    ai_training_delivered: LabelList = Field(default_factory=list)
    notes: str | None = None
    status: str | None = None
    follow_ups: list[FollowUpActionIn] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "engagement", _SIBLINGS)


class EngagementUpdate(CamelModel):
    """Fields left out of the payload keep their stored values.

    ``follow_ups`` replaces the stored list when present and leaves it alone
    when absent.
    """

    date_of_contact: OptionalDate = None
    ai_training_delivered: LabelList | None = None
    notes: str | None = None
    status: str | None = None
    follow_ups: list[FollowUpActionIn] | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "engagement", _SIBLINGS)


class EngagementResponse(CamelModel):
    id: SafeId
    company_id: SafeId
    date_of_contact: date | None = None
    ai_training_delivered: LabelList = Field(default_factory=list)
    notes: str | None = None
    status: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    follow_ups: list[FollowUpActionResponse] = Field(default_factory=list)
