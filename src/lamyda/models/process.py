"""Process model."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.lamyda.models.base import utc_now


class Process(SQLModel, table=True):
    """Documented operational process.

    User-authored content lives in ``document_by_user`` (rich-text HTML
    wrapped as ``{"html": ...}``) and ``markmap_by_user``. Content derived
    from the video analysis lives in the ``*_by_ai`` columns.
    """

    __tablename__ = "processes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: UUID = Field(foreign_key="companies.id", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    type: str = Field(max_length=50)
    status: bool = Field(default=True)
    area_id: UUID | None = Field(default=None, foreign_key="areas.id")
    team_id: UUID | None = Field(default=None, foreign_key="teams.id")
    person_in_charge: UUID | None = Field(default=None)

    document_by_user: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
    )
    markmap_by_user: str | None = Field(default=None)

    video_url: str | None = Field(default=None, max_length=2048)
    json_by_ai: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
    )
    steps_by_ai: list[dict[str, Any]] | None = Field(
        default=None,
        sa_column=Column(JSONB, nullable=True),
    )
    document_by_ai: str | None = Field(default=None)
    markmap_by_ai: str | None = Field(default=None)

    created_by: UUID | None = Field(default=None)
    updated_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def body_html(self) -> str | None:
        """Rich-text body as stored, or None."""
        if not self.document_by_user:
            return None
        return self.document_by_user.get("html")
