"""Repository layer - data access abstraction."""

from src.lamyda.repositories.area import AreaRepository
from src.lamyda.repositories.base import BaseRepository
from src.lamyda.repositories.company import CompanyRepository
from src.lamyda.repositories.document import DocumentRepository
from src.lamyda.repositories.process import NO_PROCESSES, ProcessCounts, ProcessRepository
from src.lamyda.repositories.team import TeamMemberRepository, TeamRepository

__all__ = [
    "NO_PROCESSES",
    "AreaRepository",
    "BaseRepository",
    "CompanyRepository",
    "DocumentRepository",
    "ProcessCounts",
    "ProcessRepository",
    "TeamMemberRepository",
    "TeamRepository",
]
