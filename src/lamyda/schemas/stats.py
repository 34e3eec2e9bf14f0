"""Process statistics shared by area and team responses."""

from pydantic import BaseModel


class ProcessStats(BaseModel):
    """Processes attached to an area or team.

    Active processes have status=True; the rest count as completed.
    """

    processes_count: int = 0
    active_processes_count: int = 0
    completed_processes_count: int = 0
