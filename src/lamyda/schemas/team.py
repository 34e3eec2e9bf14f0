"""Team schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.lamyda.schemas._validators import optional_text, required_text
from src.lamyda.schemas.stats import ProcessStats


class TeamCreate(BaseModel):
    """Schema for creating a team with its initial members."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    area_id: UUID
    team_leader_id: UUID | None = None
    member_ids: list[UUID] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return required_text(v, "Team name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return optional_text(v)


class TeamRead(ProcessStats):
    """Team as listed. ``sequential_id`` is None when the listing could not number it."""

    id: UUID
    sequential_id: int | None
    name: str
    description: str | None
    area_id: UUID
    area_name: str | None = None
    team_leader_id: UUID | None
    created_at: datetime
    updated_at: datetime


class TeamDetail(TeamRead):
    """Team detail with membership count."""

    members_count: int


class TeamCreated(BaseModel):
    """Result of creating a team; members that could not be added are listed."""

    team: TeamRead
    failed_member_ids: list[UUID] = Field(default_factory=list)
