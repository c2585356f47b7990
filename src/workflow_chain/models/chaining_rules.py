"""Naming convention used to wire a step's inputs to the previous step's outputs."""

from __future__ import annotations

from pydantic import BaseModel, Field


def _default_named_slots() -> dict[str, str]:
    return {
        "competitor_input": "agent_output",
        "current_de_op_input": "current_de_op_output",
    }


class ChainingRules(BaseModel):
    # input slot -> output field of the previous step
    named_slots: dict[str, str] = Field(default_factory=_default_named_slots)
    # slots that take whichever primary/fallback output is available, in priority order
    generic_slots: list[str] = Field(default_factory=lambda: ["second_input", "input_text"])
    primary_output: str = "agent_output"
    fallback_output: str = "current_de_op_output"
