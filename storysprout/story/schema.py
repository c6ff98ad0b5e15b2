"""Pydantic schema for one beat as returned by the model (strict JSON types)."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

FINAL_BEAT = 5


class BeatResponse(BaseModel):
    """Shape check only. Beat-position rules and word counts live in validators.validate_beat_structure."""

    model_config = ConfigDict(extra="ignore")

    beat: StrictInt = Field(..., ge=1, le=FINAL_BEAT)
    segment: StrictStr = Field(..., min_length=1)
    question: StrictStr | None = None
    options: list[StrictStr]

    def content_fields(self) -> dict:
        """Fields the store persists (beat number comes from the caller)."""
        return {"segment": self.segment, "question": self.question, "options": list(self.options)}
