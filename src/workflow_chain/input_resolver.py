"""Effective-input computation for chain steps."""

from __future__ import annotations

from typing import Any, Mapping

from workflow_chain.models.chaining_rules import ChainingRules
from workflow_chain.models.input_shape import GenericSlot, InputShape, NamedSlots, NoChaining


def classify_inputs(default_inputs: Mapping[str, Any], rules: ChainingRules | None = None) -> InputShape:
    """
    Decides once, from the declared default inputs, how a step receives the
    previous step's outputs. Named slots win over generic slots.
    """
    rules = rules or ChainingRules()
    named = {slot: source for slot, source in rules.named_slots.items() if slot in default_inputs}
    if named:
        return NamedSlots(slots=named)
    for slot in rules.generic_slots:
        if slot in default_inputs:
            return GenericSlot(name=slot)
    return NoChaining()


def resolve_inputs(
    shape: InputShape,
    default_inputs: Mapping[str, Any],
    previous_outputs: Mapping[str, Any] | None,
    user_modifications: Mapping[str, Any] | None,
    rules: ChainingRules | None = None,
) -> dict[str, Any]:
    """
    Returns a new input map: defaults, then chained outputs per `shape`, then
    user modifications. Slots whose source field is missing keep their default.
    """
    rules = rules or ChainingRules()
    resolved: dict[str, Any] = dict(default_inputs)

    if previous_outputs is not None:
        if isinstance(shape, NamedSlots):
            for slot, source in shape.slots.items():
                if _present(previous_outputs, source):
                    resolved[slot] = previous_outputs[source]
        elif isinstance(shape, GenericSlot):
            for source in (rules.primary_output, rules.fallback_output):
                if _present(previous_outputs, source):
                    resolved[shape.name] = previous_outputs[source]
                    break
        elif isinstance(shape, NoChaining):
            resolved.update(previous_outputs)
        else:
            raise TypeError(f"Unknown input shape: {shape!r}")

    if user_modifications:
        resolved.update(user_modifications)
    return resolved


def _present(outputs: Mapping[str, Any], key: str) -> bool:
    return outputs.get(key) is not None
