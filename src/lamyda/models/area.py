"""Area model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.lamyda.models.base import utc_now


class Area(SQLModel, table=True):
    """Organizational area inside a company."""

    __tablename__ = "areas"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: UUID = Field(foreign_key="companies.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    manager_id: UUID | None = Field(default=None)
    is_active: bool = Field(default=True)
    created_by: UUID | None = Field(default=None)
    updated_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
