"""Repository for Process entity."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select

from src.lamyda.models import Process
from src.lamyda.repositories.base import BaseRepository


@dataclass(frozen=True)
class ProcessCounts:
    """Processes attached to one area or team.

    ``active`` counts status=True rows; every other row is completed.
    """

    total: int = 0
    active: int = 0

    @property
    def completed(self) -> int:
        return self.total - self.active


NO_PROCESSES = ProcessCounts()


class ProcessRepository(BaseRepository[Process]):
    """Repository for Process entity."""

    model = Process

    async def list_active_for_company(self, company_id: UUID) -> list[Process]:
        """Active (status=True) processes of a company, newest first."""
        return await self.list_ordered(
            Process.company_id == company_id,
            col(Process.status).is_(True),
        )

    async def count_by_area(
        self, company_id: UUID, area_ids: Iterable[UUID]
    ) -> dict[UUID, ProcessCounts]:
        """Process counts per area. Areas without processes are omitted."""
        return await self._count_by(col(Process.area_id), company_id, area_ids)

    async def count_by_team(
        self, company_id: UUID, team_ids: Iterable[UUID]
    ) -> dict[UUID, ProcessCounts]:
        """Process counts per team. Teams without processes are omitted."""
        return await self._count_by(col(Process.team_id), company_id, team_ids)

    async def _count_by(
        self, column: Any, company_id: UUID, ids: Iterable[UUID]
    ) -> dict[UUID, ProcessCounts]:
        wanted = set(ids)
        if not wanted:
            return {}
        result = await self.session.execute(
            select(
                column,
                func.count().label("total"),
                func.count().filter(col(Process.status).is_(True)).label("active"),
            )
            .where(Process.company_id == company_id, column.in_(wanted))
            .group_by(column)
        )
        return {
            row[0]: ProcessCounts(total=row.total, active=row.active) for row in result.all()
        }
