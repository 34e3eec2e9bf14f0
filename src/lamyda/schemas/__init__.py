from src.lamyda.schemas.area import AreaCreate, AreaRead
from src.lamyda.schemas.document import DocumentRead, InlineImageRead
from src.lamyda.schemas.process import (
    AssetFailure,
    AssetReport,
    ProcessCreate,
    ProcessCreated,
    ProcessDetail,
    ProcessRead,
)
from src.lamyda.schemas.stats import ProcessStats
from src.lamyda.schemas.team import TeamCreate, TeamCreated, TeamDetail, TeamRead

__all__ = [
    "AreaCreate",
    "AreaRead",
    "AssetFailure",
    "AssetReport",
    "DocumentRead",
    "InlineImageRead",
    "ProcessCreate",
    "ProcessCreated",
    "ProcessDetail",
    "ProcessRead",
    "ProcessStats",
    "TeamCreate",
    "TeamCreated",
    "TeamDetail",
    "TeamRead",
]
