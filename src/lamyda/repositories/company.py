"""Repository for Company entity."""

from src.lamyda.models import Company
from src.lamyda.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company entity (read-only here)."""

    model = Company
