"""Pydantic model for the steps handed to ChainOrchestrator.create_chain."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class StepDefinition(BaseModel):
    name: str
    workflow_id: str
    api_key: str = Field(repr=False)
    inputs: dict[str, Any] = Field(default_factory=dict)
    allow_user_edit: bool = True
