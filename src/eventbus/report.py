from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, Field

Stage = Literal["on_before", "on_event", "on_after"]


class StageFailure(BaseModel):
    topic: str
    stage: Stage
    listener: str
    message: str
    skipped: int = 0  # later events of the same topic left undelivered


class PublishReport(BaseModel):
    """Outcome of one ``EventBus.publish`` call."""

    delivered: int = 0
    dropped: Dict[str, int] = Field(default_factory=dict)  # topic -> events without listeners
    failures: List[StageFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
