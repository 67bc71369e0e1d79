from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BatchPartStatus(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: int


class BatchEnvelope(BaseModel):
    """First segment of a batch response: one status entry per following part."""

    model_config = ConfigDict(extra="allow")

    response: list[BatchPartStatus]

    @property
    def statuses(self) -> list[int]:
        return [item.status for item in self.response]
