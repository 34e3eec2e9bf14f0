"""Area service - business logic for company areas."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.lamyda.core.exceptions import PersistenceError
from src.lamyda.core.logging import get_logger
from src.lamyda.models import Area
from src.lamyda.repositories import (
    NO_PROCESSES,
    AreaRepository,
    ProcessCounts,
    ProcessRepository,
    TeamRepository,
)
from src.lamyda.schemas import AreaCreate, AreaRead
from src.lamyda.services.listing import EntityListing
from src.lamyda.services.sequential_index import SequentialEntry, SequentialIndexProjector

logger = get_logger(__name__)


def to_area_read(
    area: Area,
    sequential_id: int | None,
    teams_count: int = 0,
    processes: ProcessCounts = NO_PROCESSES,
) -> AreaRead:
    return AreaRead(
        id=area.id,
        sequential_id=sequential_id,
        name=area.name,
        description=area.description,
        manager_id=area.manager_id,
        created_at=area.created_at,
        updated_at=area.updated_at,
        teams_count=teams_count,
        processes_count=processes.total,
        active_processes_count=processes.active,
        completed_processes_count=processes.completed,
    )


class AreaService:
    """Area operations for one acting user within one company."""

    def __init__(
        self,
        area_repo: AreaRepository,
        team_repo: TeamRepository,
        process_repo: ProcessRepository,
        session: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        listing: EntityListing[Area] | None = None,
    ):
        self.area_repo = area_repo
        self.team_repo = team_repo
        self.process_repo = process_repo
        self.session = session
        self.company_id = company_id
        self.user_id = user_id
        self.projector = SequentialIndexProjector(area_repo.list_active_for_company)
        self.listing = listing or EntityListing(self.projector)

    async def create_area(self, data: AreaCreate) -> AreaRead:
        """Create an active area owned by the acting company.

        The area is committed before the listing is refreshed. A failed
        refresh is logged and leaves ``sequential_id`` as None.

        Returns:
            The new area numbered within the refreshed listing.

        Raises:
            PersistenceError: If the insert or commit fails.
        """
        area = Area(
            company_id=self.company_id,
            name=data.name,
            description=data.description,
            manager_id=data.manager_id,
            is_active=True,
            created_by=self.user_id,
            updated_by=self.user_id,
        )
        try:
            self.area_repo.add(area)
            await self.session.commit()
            await self.session.refresh(area)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Could not create area '{data.name}'", original_error=e) from e

        logger.info("Area created", area_id=str(area.id), name=area.name)
        sequential_id = None
        try:
            snapshot = await self.listing.refresh(self.company_id)
            sequential_id = next(
                (e.sequential_id for e in snapshot if e.entity.id == area.id), None
            )
        except Exception as e:
            logger.warning("Area listing refresh failed", area_id=str(area.id), error=str(e))
        return to_area_read(area, sequential_id)

    async def list_areas(self) -> list[AreaRead]:
        snapshot = await self.projector.project(self.company_id)
        return await self._with_stats(snapshot)

    async def get_area(self, sequential_id: int | str) -> AreaRead | None:
        entry = await self.projector.resolve(self.company_id, sequential_id)
        if entry is None:
            return None
        [area] = await self._with_stats([entry])
        return area

    async def _with_stats(self, entries: Sequence[SequentialEntry[Area]]) -> list[AreaRead]:
        ids = [e.entity.id for e in entries]
        teams = await self.team_repo.count_active_by_area(ids)
        processes = await self.process_repo.count_by_area(self.company_id, ids)
        return [
            to_area_read(
                e.entity,
                e.sequential_id,
                teams.get(e.entity.id, 0),
                processes.get(e.entity.id, NO_PROCESSES),
            )
            for e in entries
        ]
