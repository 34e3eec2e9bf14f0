from src.lamyda.services.area_service import AreaService
from src.lamyda.services.process_service import (
    ProcessAssemblyResult,
    ProcessService,
    ProcessVideo,
)
from src.lamyda.services.promotion import AssetPromotionPipeline, PromotionResult
from src.lamyda.services.team_service import TeamService

__all__ = [
    "AreaService",
    "AssetPromotionPipeline",
    "ProcessAssemblyResult",
    "ProcessService",
    "ProcessVideo",
    "PromotionResult",
    "TeamService",
]
