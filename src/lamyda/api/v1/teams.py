"""Team endpoints, addressed by sequential id."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.lamyda.api.dependencies import TeamServiceDep
from src.lamyda.schemas import TeamCreate, TeamCreated, TeamDetail, TeamRead

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get(
    "",
    response_model=list[TeamRead],
    summary="List teams",
    description=(
        "Active teams of the company, newest first, numbered from 1. "
        "Filtering by area keeps the company-wide numbering."
    ),
)
async def list_teams(
    service: TeamServiceDep,
    area_id: Annotated[UUID | None, Query(description="Only teams of this area")] = None,
) -> list[TeamRead]:
    if area_id is not None:
        return await service.list_teams_by_area(area_id)
    return await service.list_teams()


@router.get(
    "/{sequential_id}",
    response_model=TeamDetail,
    summary="Get team",
    responses={
        200: {"description": "Team at this position, with its member count"},
        404: {"description": "No team at this position"},
    },
)
async def get_team(sequential_id: str, service: TeamServiceDep) -> TeamDetail:
    team = await service.get_team(sequential_id)
    if team is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team {sequential_id} not found",
        )
    return team


@router.post(
    "",
    response_model=TeamCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create team",
    responses={
        201: {"description": "Team created; members that could not be added are listed"},
        404: {"description": "Area not found"},
        422: {"description": "Validation error"},
        503: {"description": "Team could not be stored"},
    },
)
async def create_team(data: TeamCreate, service: TeamServiceDep) -> TeamCreated:
    return await service.create_team(data)
