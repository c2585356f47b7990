"""Human-readable rendering of step inputs and outputs for review."""

from __future__ import annotations

from typing import Any, Mapping

import yaml

from workflow_chain.models.workflow_step import WorkflowStep


def _dump(data: Mapping[str, Any]) -> str:
    return yaml.safe_dump(
        dict(data),
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=True,
    ).rstrip()


def render_review(
    step: WorkflowStep,
    effective_inputs: Mapping[str, Any],
    previous_outputs: Mapping[str, Any] | None = None,
) -> str:
    """
    Renders what a reviewer needs before a step runs: the previous step's
    outputs (when there are any) and the inputs the step will receive.
    """
    lines: list[str] = [f"# Step: {step.name}", f"id: {step.id}", f"workflow: {step.workflow_id}"]
    if not step.allow_user_edit:
        lines.append("edits: not allowed")

    if previous_outputs:
        lines.extend(["", "## Previous Outputs (YAML)", _dump(previous_outputs)])

    lines.extend(["", "## Effective Inputs (YAML)"])
    lines.append(_dump(effective_inputs) if effective_inputs else "{}")
    return "\n".join(lines).rstrip() + "\n"
