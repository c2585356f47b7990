"""Pydantic model returned by one orchestration call."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ChainStepResult(BaseModel):
    step_id: str
    outputs: dict[str, Any] = Field(default_factory=dict)
    success: bool
