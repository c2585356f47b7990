"""Runtime state of a chain of workflow steps."""

from __future__ import annotations

from pydantic import BaseModel

from workflow_chain.models.status import Status
from workflow_chain.models.workflow_step import WorkflowStep


class WorkflowChain(BaseModel):
    id: str
    name: str
    steps: list[WorkflowStep]
    current_step_index: int = 0
    status: Status = Status.PENDING

    @property
    def current_step(self) -> WorkflowStep | None:
        if self.current_step_index < len(self.steps):
            return self.steps[self.current_step_index]
        return None

    @property
    def previous_step(self) -> WorkflowStep | None:
        if 0 < self.current_step_index <= len(self.steps):
            return self.steps[self.current_step_index - 1]
        return None
