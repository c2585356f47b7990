import copy

import pytest

from workflow_chain.input_resolver import classify_inputs, resolve_inputs
from workflow_chain.models import ChainingRules
from workflow_chain.models import GenericSlot
from workflow_chain.models import NamedSlots
from workflow_chain.models import NoChaining


def test_classify_inputs_prefers_named_slots() -> None:
    shape = classify_inputs({"competitor_input": "", "second_input": "", "other": 1})

    assert shape == NamedSlots(slots={"competitor_input": "agent_output"})


def test_classify_inputs_detects_generic_slot_and_no_chaining() -> None:
    assert classify_inputs({"second_input": "placeholder"}) == GenericSlot(name="second_input")
    assert classify_inputs({"input_text": "placeholder"}) == GenericSlot(name="input_text")
    assert classify_inputs({"company_name": "Tesla"}) == NoChaining()
    assert classify_inputs({}) == NoChaining()


def test_classify_inputs_uses_custom_rules() -> None:
    rules = ChainingRules(named_slots={"summary_in": "summary"}, generic_slots=["prev"])

    assert classify_inputs({"summary_in": ""}, rules) == NamedSlots(slots={"summary_in": "summary"})
    assert classify_inputs({"prev": ""}, rules) == GenericSlot(name="prev")
    assert classify_inputs({"competitor_input": ""}, rules) == NoChaining()


def test_resolve_without_previous_outputs_applies_only_user_modifications() -> None:
    defaults = {"company_name": "Tesla", "Sector": "Automotive"}

    resolved = resolve_inputs(classify_inputs(defaults), defaults, None, {"Sector": "Energy"})

    assert resolved == {"company_name": "Tesla", "Sector": "Energy"}


def test_resolve_generic_slot_takes_primary_output() -> None:
    defaults = {"second_input": "Will be populated"}

    resolved = resolve_inputs(
        classify_inputs(defaults),
        defaults,
        {"agent_output": "X", "current_de_op_output": "ops", "unrelated": 1},
        None,
    )

    assert resolved == {"second_input": "X"}


def test_resolve_generic_slot_falls_back_to_secondary_output() -> None:
    defaults = {"input_text": "placeholder"}

    resolved = resolve_inputs(classify_inputs(defaults), defaults, {"current_de_op_output": "ops"}, None)

    assert resolved == {"input_text": "ops"}


def test_resolve_generic_slot_keeps_default_when_nothing_matches() -> None:
    defaults = {"second_input": "placeholder"}

    resolved = resolve_inputs(classify_inputs(defaults), defaults, {"something_else": "v"}, None)

    assert resolved == {"second_input": "placeholder"}


def test_resolve_named_slots_leave_unmatched_slot_at_default() -> None:
    defaults = {
        "competitor_input": "Will be populated from agent_output",
        "current_de_op_input": "Will be populated from current_de_op_output",
    }

    resolved = resolve_inputs(classify_inputs(defaults), defaults, {"agent_output": "Y"}, None)

    assert resolved == {
        "competitor_input": "Y",
        "current_de_op_input": "Will be populated from current_de_op_output",
    }


def test_resolve_named_slots_copy_only_declared_fields() -> None:
    defaults = {"competitor_input": "", "current_de_op_input": ""}
    previous = {"agent_output": "Y", "current_de_op_output": "Z", "noise": "n"}

    resolved = resolve_inputs(classify_inputs(defaults), defaults, previous, None)

    assert resolved == {"competitor_input": "Y", "current_de_op_input": "Z"}


def test_resolve_named_slot_ignores_null_output() -> None:
    defaults = {"competitor_input": "default"}

    resolved = resolve_inputs(classify_inputs(defaults), defaults, {"agent_output": None}, None)

    assert resolved == {"competitor_input": "default"}


def test_resolve_no_chaining_merges_all_previous_outputs() -> None:
    defaults = {"topic": "cars", "depth": 1}

    resolved = resolve_inputs(classify_inputs(defaults), defaults, {"depth": 3, "notes": "n"}, None)

    assert resolved == {"topic": "cars", "depth": 3, "notes": "n"}


@pytest.mark.parametrize(
    "defaults,previous",
    [
        ({"extra": "default"}, {"extra": "chained"}),
        ({"second_input": "", "extra": "default"}, {"agent_output": "chained"}),
        ({"competitor_input": "", "extra": "default"}, {"agent_output": "chained"}),
    ],
)
def test_user_modifications_override_every_other_source(defaults: dict, previous: dict) -> None:
    resolved = resolve_inputs(classify_inputs(defaults), defaults, previous, {"extra": "z", "second_input": "u"})

    assert resolved["extra"] == "z"
    assert resolved["second_input"] == "u"


def test_resolve_is_pure_and_deterministic() -> None:
    defaults = {"second_input": "placeholder", "nested": {"a": 1}}
    previous = {"agent_output": "X"}
    modifications = {"nested": {"b": 2}}
    snapshot = copy.deepcopy((defaults, previous, modifications))
    shape = classify_inputs(defaults)

    first = resolve_inputs(shape, defaults, previous, modifications)
    second = resolve_inputs(shape, defaults, previous, modifications)

    assert first == second
    assert first is not second
    assert first is not defaults
    assert (defaults, previous, modifications) == snapshot
