"""Team service - teams and their initial membership."""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.lamyda.core.exceptions import EntityNotFoundError, PersistenceError
from src.lamyda.core.logging import get_logger
from src.lamyda.models import Team, TeamMember, TeamRole
from src.lamyda.repositories import (
    NO_PROCESSES,
    AreaRepository,
    ProcessCounts,
    ProcessRepository,
    TeamMemberRepository,
    TeamRepository,
)
from src.lamyda.schemas import TeamCreate, TeamCreated, TeamDetail, TeamRead
from src.lamyda.services.listing import EntityListing
from src.lamyda.services.sequential_index import SequentialIndexProjector

logger = get_logger(__name__)


class TeamService:
    """Team operations for one acting user within one company.

    Teams reach their company through their area, so the listing covers
    active teams whose area is an active area of the company.
    """

    def __init__(
        self,
        team_repo: TeamRepository,
        member_repo: TeamMemberRepository,
        area_repo: AreaRepository,
        process_repo: ProcessRepository,
        session: AsyncSession,
        company_id: UUID,
        user_id: UUID,
        listing: EntityListing[Team] | None = None,
    ):
        self.team_repo = team_repo
        self.member_repo = member_repo
        self.area_repo = area_repo
        self.process_repo = process_repo
        self.session = session
        self.company_id = company_id
        self.user_id = user_id
        self.projector = SequentialIndexProjector(team_repo.list_active_for_company)
        self.listing = listing or EntityListing(self.projector)

    async def create_team(self, data: TeamCreate) -> TeamCreated:
        """Create a team, then add its leader and members.

        The team row is committed first; membership inserts that fail
        afterwards are logged and reported in ``failed_member_ids``. A failed
        listing refresh is logged and leaves ``sequential_id`` as None.

        Raises:
            EntityNotFoundError: If the area is not an active area of the company.
            PersistenceError: If the team itself cannot be stored.
        """
        area = await self.area_repo.get_active_for_company(data.area_id, self.company_id)
        if area is None:
            raise EntityNotFoundError(f"Area {data.area_id} not found")
        names = {area.id: area.name}

        team = Team(
            area_id=data.area_id,
            name=data.name,
            description=data.description,
            team_leader_id=data.team_leader_id,
            created_by=self.user_id,
            updated_by=self.user_id,
        )
        try:
            self.team_repo.add(team)
            await self.session.commit()
            await self.session.refresh(team)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Could not create team '{data.name}'", original_error=e) from e

        self.session.expunge(team)
        logger.info("Team created", team_id=str(team.id), area_id=str(data.area_id))

        failed: list[UUID] = []
        for user_id, role in self._memberships(data):
            if not await self._add_member(team.id, user_id, role):
                failed.append(user_id)

        sequential_id = None
        try:
            snapshot = await self.listing.refresh(self.company_id)
            sequential_id = next(
                (e.sequential_id for e in snapshot if e.entity.id == team.id), None
            )
        except Exception as e:
            logger.warning("Team listing refresh failed", team_id=str(team.id), error=str(e))
        return TeamCreated(
            team=to_team_read(team, sequential_id, names), failed_member_ids=failed
        )

    @staticmethod
    def _memberships(data: TeamCreate) -> list[tuple[UUID, TeamRole]]:
        """Leader first, then listed members without duplicates."""
        memberships: list[tuple[UUID, TeamRole]] = []
        seen: set[UUID] = set()
        if data.team_leader_id is not None:
            memberships.append((data.team_leader_id, TeamRole.LEADER))
            seen.add(data.team_leader_id)
        for member_id in data.member_ids:
            if member_id in seen:
                continue
            memberships.append((member_id, TeamRole.MEMBER))
            seen.add(member_id)
        return memberships

    async def _add_member(self, team_id: UUID, user_id: UUID, role: TeamRole) -> bool:
        member = TeamMember(
            team_id=team_id,
            user_id=user_id,
            role=role.value,
            added_by=self.user_id,
        )
        try:
            self.member_repo.add(member)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(
                "Team member insert failed",
                team_id=str(team_id),
                user_id=str(user_id),
                role=role.value,
                error=str(e),
            )
            return False
        return True

    async def list_teams(self) -> list[TeamRead]:
        snapshot = await self.projector.project(self.company_id)
        names = await self.area_repo.get_names({e.entity.area_id for e in snapshot})
        processes = await self.process_repo.count_by_team(
            self.company_id, [e.entity.id for e in snapshot]
        )
        return [
            to_team_read(
                e.entity, e.sequential_id, names, processes.get(e.entity.id, NO_PROCESSES)
            )
            for e in snapshot
        ]

    async def list_teams_by_area(self, area_id: UUID) -> list[TeamRead]:
        """Teams of one area, keeping their company-wide sequential ids."""
        return [team for team in await self.list_teams() if team.area_id == area_id]

    async def get_team(self, sequential_id: int | str) -> TeamDetail | None:
        entry = await self.projector.resolve(self.company_id, sequential_id)
        if entry is None:
            return None
        team = entry.entity
        names = await self.area_repo.get_names([team.area_id])
        processes = await self.process_repo.count_by_team(self.company_id, [team.id])
        members_count = await self.member_repo.count_active(team.id)
        return TeamDetail(
            **to_team_read(
                team, entry.sequential_id, names, processes.get(team.id, NO_PROCESSES)
            ).model_dump(),
            members_count=members_count,
        )


def to_team_read(
    team: Team,
    sequential_id: int | None,
    area_names: dict[UUID, str],
    processes: ProcessCounts = NO_PROCESSES,
) -> TeamRead:
    return TeamRead(
        id=team.id,
        sequential_id=sequential_id,
        name=team.name,
        description=team.description,
        area_id=team.area_id,
        area_name=area_names.get(team.area_id),
        team_leader_id=team.team_leader_id,
        created_at=team.created_at,
        updated_at=team.updated_at,
        processes_count=processes.total,
        active_processes_count=processes.active,
        completed_processes_count=processes.completed,
    )
