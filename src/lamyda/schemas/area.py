"""Area schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.lamyda.schemas._validators import optional_text, required_text
from src.lamyda.schemas.stats import ProcessStats


class AreaCreate(BaseModel):
    """Schema for creating an area."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    manager_id: UUID | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return required_text(v, "Area name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return optional_text(v)


class AreaRead(ProcessStats):
    """Area as listed: durable id plus its sequential id in the current snapshot.

    ``sequential_id`` is None when the area is missing from the snapshot
    taken after it was created.
    """

    id: UUID
    sequential_id: int | None
    name: str
    description: str | None
    manager_id: UUID | None
    created_at: datetime
    updated_at: datetime
    teams_count: int = 0

    model_config = {"from_attributes": True}
