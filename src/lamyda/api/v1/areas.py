"""Area endpoints, addressed by sequential id."""

from fastapi import APIRouter, HTTPException, status

from src.lamyda.api.dependencies import AreaServiceDep
from src.lamyda.schemas import AreaCreate, AreaRead

router = APIRouter(prefix="/areas", tags=["areas"])


@router.get(
    "",
    response_model=list[AreaRead],
    summary="List areas",
    description="Active areas of the company, newest first, numbered from 1.",
)
async def list_areas(service: AreaServiceDep) -> list[AreaRead]:
    return await service.list_areas()


@router.get(
    "/{sequential_id}",
    response_model=AreaRead,
    summary="Get area",
    responses={
        200: {"description": "Area at this position in the current listing"},
        404: {"description": "No area at this position"},
    },
)
async def get_area(sequential_id: str, service: AreaServiceDep) -> AreaRead:
    area = await service.get_area(sequential_id)
    if area is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Area {sequential_id} not found",
        )
    return area


@router.post(
    "",
    response_model=AreaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create area",
    responses={
        201: {"description": "Area created"},
        422: {"description": "Validation error"},
        503: {"description": "Area could not be stored"},
    },
)
async def create_area(data: AreaCreate, service: AreaServiceDep) -> AreaRead:
    return await service.create_area(data)
