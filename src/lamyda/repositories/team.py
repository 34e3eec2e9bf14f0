"""Repositories for Team and TeamMember entities."""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select

from src.lamyda.models import Area, Team, TeamMember
from src.lamyda.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for Team entity.

    Teams are scoped to a company through their area, so every
    company-level query joins areas.
    """

    model = Team

    async def list_active_for_company(self, company_id: UUID) -> list[Team]:
        """Active teams whose area is an active area of the company, newest first."""
        result = await self.session.execute(
            select(Team)
            .join(Area, col(Area.id) == col(Team.area_id))
            .where(
                Area.company_id == company_id,
                col(Area.is_active).is_(True),
                col(Team.is_active).is_(True),
            )
            .order_by(col(Team.created_at).desc())
        )
        return list(result.scalars().all())

    async def get_active_for_company(self, team_id: UUID, company_id: UUID) -> Team | None:
        """Get an active team only if its area is an active area of the company."""
        result = await self.session.execute(
            select(Team)
            .join(Area, col(Area.id) == col(Team.area_id))
            .where(
                Team.id == team_id,
                Area.company_id == company_id,
                col(Area.is_active).is_(True),
                col(Team.is_active).is_(True),
            )
        )
        return result.scalar_one_or_none()

    async def get_names(self, team_ids: Iterable[UUID]) -> dict[UUID, str]:
        """Map active team ids to names. Inactive or unknown ids are omitted."""
        ids = set(team_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(Team.id, Team.name).where(
                col(Team.id).in_(ids),
                col(Team.is_active).is_(True),
            )
        )
        return {row.id: row.name for row in result.all()}

    async def count_active_by_area(self, area_ids: Iterable[UUID]) -> dict[UUID, int]:
        """Number of active teams per area. Areas without teams are omitted."""
        ids = set(area_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(Team.area_id, func.count().label("teams"))
            .where(
                col(Team.area_id).in_(ids),
                col(Team.is_active).is_(True),
            )
            .group_by(col(Team.area_id))
        )
        return {row.area_id: row.teams for row in result.all()}


class TeamMemberRepository(BaseRepository[TeamMember]):
    """Repository for TeamMember entity."""

    model = TeamMember

    async def count_active(self, team_id: UUID) -> int:
        """Number of active members of a team."""
        result = await self.session.execute(
            select(func.count())
            .select_from(TeamMember)
            .where(
                TeamMember.team_id == team_id,
                col(TeamMember.is_active).is_(True),
            )
        )
        return result.scalar_one()
