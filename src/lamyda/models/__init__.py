"""Model exports.

Import from here: `from src.lamyda.models import Process, Document`
"""

from src.lamyda.models.area import Area
from src.lamyda.models.company import Company
from src.lamyda.models.document import Document
from src.lamyda.models.enums import AssetKind, TeamRole
from src.lamyda.models.process import Process
from src.lamyda.models.team import Team, TeamMember

__all__ = [
    # Enums
    "AssetKind",
    "TeamRole",
    # Tables
    "Area",
    "Company",
    "Document",
    "Process",
    "Team",
    "TeamMember",
]
