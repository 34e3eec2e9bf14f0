"""Adapter between the video-analysis service's payload and process fields.

The analysis service returns loosely structured JSON with Portuguese keys.
Only this module knows those key names; the rest of the code works with
AnalysisExtract.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.lamyda.core.logging import get_logger

logger = get_logger(__name__)

ENVELOPE_KEY = "analysis"
STEPS_KEY = "processo_passos"
STEPS_MARKDOWN_KEY = "processo_passos_markdown"
MINDMAP_MARKDOWN_KEY = "markdown_markmap"


class ProcessStep(BaseModel):
    """One step of the analysed video. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    step: int | None = Field(default=None, alias="passo")
    timestamp: str | int | float | None = None
    duration: str | int | float | None = Field(default=None, alias="duracao")
    description: str | None = Field(default=None, alias="descricao")


class AnalysisExtract(BaseModel):
    """Fields lifted from an analysis payload.

    ``raw`` is the (unwrapped) payload exactly as received, vendor keys
    included. Every other field is None when the payload did not carry it.
    """

    raw: dict[str, Any]
    steps: list[ProcessStep] | None = None
    steps_markdown: str | None = None
    mindmap_markdown: str | None = None

    def process_fields(self) -> dict[str, Any]:
        """Column values to merge into a process record.

        The raw payload is always included; the rest only when present.
        """
        values: dict[str, Any] = {"json_by_ai": self.raw}
        if self.steps is not None:
            values["steps_by_ai"] = [
                step.model_dump(by_alias=True, exclude_none=True) for step in self.steps
            ]
        if self.steps_markdown:
            values["document_by_ai"] = self.steps_markdown
        if self.mindmap_markdown:
            values["markmap_by_ai"] = self.mindmap_markdown
        return values


def unwrap_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return the ``analysis`` envelope's content when present, else the payload."""
    inner = payload.get(ENVELOPE_KEY)
    if isinstance(inner, Mapping):
        return dict(inner)
    return dict(payload)


def extract_analysis(payload: Mapping[str, Any]) -> AnalysisExtract:
    """Lift the known optional fields out of an analysis payload.

    Absent or wrongly typed fields are left as None. A step list that does
    not validate is logged and dropped; the raw payload is still kept.
    """
    raw = unwrap_payload(payload)

    steps: list[ProcessStep] | None = None
    raw_steps = raw.get(STEPS_KEY)
    if isinstance(raw_steps, list):
        try:
            steps = [ProcessStep.model_validate(item) for item in raw_steps]
        except ValidationError as e:
            logger.warning("Discarding malformed analysis steps", error=str(e))

    steps_markdown = raw.get(STEPS_MARKDOWN_KEY)
    mindmap_markdown = raw.get(MINDMAP_MARKDOWN_KEY)

    return AnalysisExtract(
        raw=raw,
        steps=steps,
        steps_markdown=steps_markdown if isinstance(steps_markdown, str) else None,
        mindmap_markdown=mindmap_markdown if isinstance(mindmap_markdown, str) else None,
    )
