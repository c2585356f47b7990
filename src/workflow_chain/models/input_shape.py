"""How a step's default inputs declare the slots fed by the previous step."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class NoChaining(BaseModel):
    """No recognized slot; the previous outputs are merged wholesale."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["no_chaining"] = "no_chaining"


class NamedSlots(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["named_slots"] = "named_slots"
    slots: dict[str, str]  # input slot -> previous output field


class GenericSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["generic_slot"] = "generic_slot"
    name: str


InputShape = Annotated[Union[NoChaining, NamedSlots, GenericSlot], Field(discriminator="kind")]
