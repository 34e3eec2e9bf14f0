"""Company model - owner of every area, team and process."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.lamyda.models.base import utc_now


class Company(SQLModel, table=True):
    """Company record.

    Companies are provisioned by the onboarding flow; this service only
    reads them to scope every query.
    """

    __tablename__ = "companies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
