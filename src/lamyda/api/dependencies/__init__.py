"""FastAPI dependency injection definitions."""

from src.lamyda.api.dependencies.context import (
    Acting,
    ActingContext,
    get_acting_context,
    get_company_id_from_header,
    get_user_id_from_header,
)
from src.lamyda.api.dependencies.db import DBSession, get_db_session
from src.lamyda.api.dependencies.repositories import (
    AreaRepo,
    DocumentRepo,
    ProcessRepo,
    TeamMemberRepo,
    TeamRepo,
)
from src.lamyda.api.dependencies.services import (
    AppSettings,
    AreaServiceDep,
    ProcessServiceDep,
    Storage,
    TeamServiceDep,
    get_area_service,
    get_object_storage,
    get_process_service,
    get_promotion_pipeline,
    get_team_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Acting context
    "Acting",
    "ActingContext",
    "get_acting_context",
    "get_company_id_from_header",
    "get_user_id_from_header",
    # Repositories
    "AreaRepo",
    "DocumentRepo",
    "ProcessRepo",
    "TeamMemberRepo",
    "TeamRepo",
    # Services
    "AppSettings",
    "AreaServiceDep",
    "ProcessServiceDep",
    "Storage",
    "TeamServiceDep",
    "get_area_service",
    "get_object_storage",
    "get_process_service",
    "get_promotion_pipeline",
    "get_team_service",
]
