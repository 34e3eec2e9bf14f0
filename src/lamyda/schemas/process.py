"""Process schemas for API request/response."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.lamyda.schemas._validators import optional_text, required_text


class ProcessCreate(BaseModel):
    """Scalar fields and text bodies of a new process.

    ``notes`` is the rich-text HTML body. It may still reference inline
    images by their preview references; those are rewritten once the
    images are promoted.
    """

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    type: str = Field(min_length=1, max_length=50)
    area_id: UUID | None = None
    team_id: UUID | None = None
    person_in_charge_id: UUID | None = None
    notes: str | None = None
    markmap: str | None = None
    status: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return required_text(v, "Process name")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        return required_text(v, "Process type")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return optional_text(v)


class ProcessRead(BaseModel):
    """Process as listed."""

    id: UUID
    sequential_id: int | None
    name: str
    description: str | None
    type: str
    status: bool
    video_url: str | None
    area_id: UUID | None
    area_name: str | None = None
    team_id: UUID | None
    team_name: str | None = None
    person_in_charge_id: UUID | None
    created_at: datetime
    updated_at: datetime


class ProcessDetail(ProcessRead):
    """Process with its bodies and AI-derived content."""

    company_id: UUID
    document_by_user: dict[str, Any] | None
    markmap_by_user: str | None
    document_by_ai: str | None
    markmap_by_ai: str | None
    json_by_ai: dict[str, Any] | None
    steps_by_ai: list[dict[str, Any]] | None


class AssetFailure(BaseModel):
    """An attachment that could not be promoted."""

    file_name: str
    kind: str
    error: str


class AssetReport(BaseModel):
    """Promotion outcome of every attachment submitted with a process."""

    promoted: int
    failed: list[AssetFailure]
    analysis_merged: bool


class ProcessCreated(BaseModel):
    """Response for a created process.

    The process exists whenever this is returned; ``assets.failed`` lists
    attachments that did not make it.
    """

    process: ProcessDetail
    assets: AssetReport
