"""Repository queries against PostgreSQL."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.lamyda.models import Company, Process
from src.lamyda.repositories import (
    AreaRepository,
    DocumentRepository,
    ProcessCounts,
    ProcessRepository,
    TeamMemberRepository,
    TeamRepository,
)
from tests.factories import (
    AreaFactory,
    DocumentFactory,
    ProcessFactory,
    TeamFactory,
    TeamMemberFactory,
    utc_now,
)

pytestmark = pytest.mark.integration


async def test_areas_newest_first_and_scoped(
    db_session: AsyncSession, test_company: Company, other_company: Company
):
    now = utc_now()
    older = AreaFactory.build(company_id=test_company.id, created_at=now - timedelta(hours=1))
    newer = AreaFactory.build(company_id=test_company.id, created_at=now)
    closed = AreaFactory.build(company_id=test_company.id, is_active=False)
    foreign = AreaFactory.build(company_id=other_company.id)
    db_session.add_all([older, newer, closed, foreign])
    await db_session.commit()

    repo = AreaRepository(db_session)

    assert [a.id for a in await repo.list_active_for_company(test_company.id)] == [
        newer.id,
        older.id,
    ]
    assert await repo.get_active_for_company(foreign.id, test_company.id) is None
    assert await repo.get_names([older.id, closed.id]) == {older.id: older.name}


async def test_teams_scoped_through_area(
    db_session: AsyncSession, test_company: Company, other_company: Company
):
    area = AreaFactory.build(company_id=test_company.id)
    foreign_area = AreaFactory.build(company_id=other_company.id)
    db_session.add_all([area, foreign_area])
    await db_session.flush()
    team = TeamFactory.build(area_id=area.id)
    foreign_team = TeamFactory.build(area_id=foreign_area.id)
    db_session.add_all([team, foreign_team])
    await db_session.flush()
    db_session.add_all(
        [
            TeamMemberFactory.build(team_id=team.id),
            TeamMemberFactory.build(team_id=team.id),
            TeamMemberFactory.build(team_id=team.id, is_active=False),
        ]
    )
    await db_session.commit()

    teams = TeamRepository(db_session)
    members = TeamMemberRepository(db_session)

    assert [t.id for t in await teams.list_active_for_company(test_company.id)] == [team.id]
    assert await teams.get_active_for_company(foreign_team.id, test_company.id) is None
    assert await teams.count_active_by_area([area.id, foreign_area.id]) == {
        area.id: 1,
        foreign_area.id: 1,
    }
    assert await members.count_active(team.id) == 2


async def test_process_update_fields_and_documents(
    db_session: AsyncSession, test_company: Company
):
    process = ProcessFactory.build(company_id=test_company.id)
    archived = ProcessFactory.archived(company_id=test_company.id)
    db_session.add_all([process, archived])
    await db_session.flush()
    document = DocumentFactory.build(process_id=process.id)
    db_session.add(document)
    await db_session.commit()

    repo = ProcessRepository(db_session)

    matched = await repo.update_fields(
        process.id, {"video_url": "https://storage.test/v.mp4", "steps_by_ai": [{"passo": 1}]}
    )
    await db_session.commit()

    assert matched == 1
    db_session.expunge_all()
    stored = await db_session.get(Process, process.id)
    assert stored is not None
    assert stored.video_url == "https://storage.test/v.mp4"
    assert stored.steps_by_ai == [{"passo": 1}]
    assert [p.id for p in await repo.list_active_for_company(test_company.id)] == [process.id]
    assert [d.id for d in await DocumentRepository(db_session).list_for_process(process.id)] == [
        document.id
    ]


async def test_team_in_closed_area_is_hidden(db_session: AsyncSession, test_company: Company):
    closed = AreaFactory.build(company_id=test_company.id, is_active=False)
    db_session.add(closed)
    await db_session.flush()
    team = TeamFactory.build(area_id=closed.id)
    db_session.add(team)
    await db_session.commit()

    repo = TeamRepository(db_session)

    assert await repo.get_active_for_company(team.id, test_company.id) is None
    assert await repo.list_active_for_company(test_company.id) == []


async def test_process_counts_by_area_and_team(
    db_session: AsyncSession, test_company: Company, other_company: Company
):
    area = AreaFactory.build(company_id=test_company.id)
    db_session.add(area)
    await db_session.flush()
    team = TeamFactory.build(area_id=area.id)
    db_session.add(team)
    await db_session.flush()
    db_session.add_all(
        [
            ProcessFactory.build(company_id=test_company.id, area_id=area.id, team_id=team.id),
            ProcessFactory.build(company_id=test_company.id, area_id=area.id),
            ProcessFactory.archived(company_id=test_company.id, area_id=area.id, team_id=team.id),
            ProcessFactory.build(company_id=other_company.id, area_id=area.id),
        ]
    )
    await db_session.commit()

    repo = ProcessRepository(db_session)

    by_area = await repo.count_by_area(test_company.id, [area.id])
    by_team = await repo.count_by_team(test_company.id, [team.id])

    assert by_area == {area.id: ProcessCounts(total=3, active=2)}
    assert by_area[area.id].completed == 1
    assert by_team == {team.id: ProcessCounts(total=2, active=1)}
    assert await repo.count_by_area(test_company.id, []) == {}
