"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.lamyda.api.dependencies.db import DBSession
from src.lamyda.repositories import (
    AreaRepository,
    DocumentRepository,
    ProcessRepository,
    TeamMemberRepository,
    TeamRepository,
)


def get_area_repository(session: DBSession) -> AreaRepository:
    return AreaRepository(session)


def get_team_repository(session: DBSession) -> TeamRepository:
    return TeamRepository(session)


def get_team_member_repository(session: DBSession) -> TeamMemberRepository:
    return TeamMemberRepository(session)


def get_process_repository(session: DBSession) -> ProcessRepository:
    return ProcessRepository(session)


def get_document_repository(session: DBSession) -> DocumentRepository:
    return DocumentRepository(session)


AreaRepo = Annotated[AreaRepository, Depends(get_area_repository)]
TeamRepo = Annotated[TeamRepository, Depends(get_team_repository)]
TeamMemberRepo = Annotated[TeamMemberRepository, Depends(get_team_member_repository)]
ProcessRepo = Annotated[ProcessRepository, Depends(get_process_repository)]
DocumentRepo = Annotated[DocumentRepository, Depends(get_document_repository)]
