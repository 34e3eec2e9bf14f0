"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.lamyda.api.dependencies.context import Acting
from src.lamyda.api.dependencies.db import DBSession
from src.lamyda.api.dependencies.repositories import (
    AreaRepo,
    DocumentRepo,
    ProcessRepo,
    TeamMemberRepo,
    TeamRepo,
)
from src.lamyda.core.config import Settings, get_settings
from src.lamyda.services import (
    AreaService,
    AssetPromotionPipeline,
    ProcessService,
    TeamService,
)
from src.lamyda.storage import ObjectStorage, SupabaseStorage

AppSettings = Annotated[Settings, Depends(get_settings)]


def get_object_storage(settings: AppSettings) -> ObjectStorage:
    """Storage bucket configured for this deployment."""
    return SupabaseStorage.from_settings(settings)


Storage = Annotated[ObjectStorage, Depends(get_object_storage)]


def get_promotion_pipeline(
    storage: Storage,
    document_repo: DocumentRepo,
    session: DBSession,
    settings: AppSettings,
) -> AssetPromotionPipeline:
    return AssetPromotionPipeline(storage, document_repo, session, settings)


def get_area_service(
    area_repo: AreaRepo,
    team_repo: TeamRepo,
    process_repo: ProcessRepo,
    session: DBSession,
    acting: Acting,
) -> AreaService:
    return AreaService(
        area_repo, team_repo, process_repo, session, acting.company_id, acting.user_id
    )


def get_team_service(
    team_repo: TeamRepo,
    member_repo: TeamMemberRepo,
    area_repo: AreaRepo,
    process_repo: ProcessRepo,
    session: DBSession,
    acting: Acting,
) -> TeamService:
    return TeamService(
        team_repo,
        member_repo,
        area_repo,
        process_repo,
        session,
        acting.company_id,
        acting.user_id,
    )


def get_process_service(
    process_repo: ProcessRepo,
    area_repo: AreaRepo,
    team_repo: TeamRepo,
    document_repo: DocumentRepo,
    pipeline: Annotated[AssetPromotionPipeline, Depends(get_promotion_pipeline)],
    session: DBSession,
    acting: Acting,
) -> ProcessService:
    return ProcessService(
        process_repo,
        area_repo,
        team_repo,
        document_repo,
        pipeline,
        session,
        acting.company_id,
        acting.user_id,
    )


AreaServiceDep = Annotated[AreaService, Depends(get_area_service)]
TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
ProcessServiceDep = Annotated[ProcessService, Depends(get_process_service)]
