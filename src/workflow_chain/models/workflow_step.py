"""Runtime state of one step in a chain."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from workflow_chain.models.input_shape import InputShape, NoChaining
from workflow_chain.models.status import Status


class WorkflowStep(BaseModel):
    id: str
    name: str
    workflow_id: str
    api_key: str = Field(repr=False, exclude=True)
    inputs: dict[str, Any] = Field(default_factory=dict)
    user_modifications: Optional[dict[str, Any]] = None
    outputs: Optional[dict[str, Any]] = None
    status: Status = Status.PENDING
    allow_user_edit: bool = True
    input_shape: InputShape = Field(default_factory=NoChaining, exclude=True)
