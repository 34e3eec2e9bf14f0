"""Repository for Area entity."""

from collections.abc import Iterable
from uuid import UUID

from sqlmodel import col, select

from src.lamyda.models import Area
from src.lamyda.repositories.base import BaseRepository


class AreaRepository(BaseRepository[Area]):
    """Repository for Area entity."""

    model = Area

    async def list_active_for_company(self, company_id: UUID) -> list[Area]:
        """Active areas of a company, newest first."""
        return await self.list_ordered(
            Area.company_id == company_id,
            col(Area.is_active).is_(True),
        )

    async def get_active_for_company(self, area_id: UUID, company_id: UUID) -> Area | None:
        """Get an active area only if it belongs to the company."""
        result = await self.session.execute(
            select(Area).where(
                Area.id == area_id,
                Area.company_id == company_id,
                col(Area.is_active).is_(True),
            )
        )
        return result.scalar_one_or_none()

    async def get_names(self, area_ids: Iterable[UUID]) -> dict[UUID, str]:
        """Map active area ids to names. Inactive or unknown ids are omitted."""
        ids = set(area_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(Area.id, Area.name).where(
                col(Area.id).in_(ids),
                col(Area.is_active).is_(True),
            )
        )
        return {row.id: row.name for row in result.all()}
