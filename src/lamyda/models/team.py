"""Team and team membership models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.lamyda.models.base import utc_now
from src.lamyda.models.enums import TeamRole


class Team(SQLModel, table=True):
    """Team inside an area.

    Teams carry no company_id of their own; they belong to a company
    through their area.
    """

    __tablename__ = "teams"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    area_id: UUID = Field(foreign_key="areas.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    team_leader_id: UUID | None = Field(default=None)
    is_active: bool = Field(default=True)
    created_by: UUID | None = Field(default=None)
    updated_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TeamMember(SQLModel, table=True):
    """Membership of a user in a team."""

    __tablename__ = "team_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    team_id: UUID = Field(foreign_key="teams.id", index=True)
    user_id: UUID = Field(index=True)
    role: str = Field(default=TeamRole.MEMBER.value, max_length=20)
    is_active: bool = Field(default=True)
    added_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
