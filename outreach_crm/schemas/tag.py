from datetime import datetime

from pydantic import Field, model_validator

from outreach_crm.core.ids import SafeId
from outreach_crm.models import CamelModel, NonBlankStr, unwrap_envelope


class TagCreate(CamelModel):
    name: NonBlankStr = Field(..., max_length=200)
    type: NonBlankStr = Field(..., max_length=100)

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "tag")


class TagResponse(CamelModel):
    id: SafeId
    name: str
    type: str
    created_at: datetime | None = None
