from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class HistoryPart(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    text: StrictStr


class HistoryTurn(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    role: Literal["user", "model"]
    parts: list[HistoryPart] = Field(min_length=1)
