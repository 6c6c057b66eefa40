from datetime import datetime

from pydantic import Field, model_validator

from outreach_crm.core.ids import SafeId
from outreach_crm.models import CamelModel, NonBlankStr, unwrap_envelope


class FileCreate(CamelModel):
    name: NonBlankStr = Field(..., max_length=500)
    type: str | None = Field(default=None, max_length=200)
    url: NonBlankStr
    company_id: SafeId | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        return unwrap_envelope(data, "file")


class FileResponse(CamelModel):
    id: SafeId
    company_id: SafeId | None = None
    name: str
    type: str | None = None
    url: str
    created_at: datetime | None = None
