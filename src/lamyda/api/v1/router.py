from fastapi import APIRouter

from src.lamyda.api.v1 import areas, processes, teams

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(areas.router)
api_router.include_router(teams.router)
api_router.include_router(processes.router)
