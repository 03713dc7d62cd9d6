"""Messages exchanged between the plugin and its UI panel.

Inbound (UI → plugin), discriminated on ``type``:
    - ``generate``: ``{variants: [{sizePx, strokeWeight}], customStroke}``
    - ``cancel``: ``{}``

Outbound (plugin → UI):
    - ``error``: ``{message}``
    - ``defaults``: ``{variants, customStroke}`` initial form state
    - ``done``: ``{componentSets, variantsPerSet, cancelled}``

Variant rows are kept loosely typed on purpose: the form sends whatever
the user typed, and the sanitizer decides which rows survive.  Field
names follow the UI's camelCase on the wire and snake_case in Python.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class VariantRow(BaseModel):
    """One raw row of the variant form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    size_px: Any = Field(None, alias="sizePx", description="Requested size (px), unvalidated")
    stroke_weight: Any = Field(None, alias="strokeWeight", description="Requested stroke weight, unvalidated")


class GenerateMessage(BaseModel):
    """Request to generate variant sets for the current selection."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["generate"] = "generate"
    variants: list[VariantRow] = Field(default_factory=list)
    custom_stroke: bool = Field(False, alias="customStroke")


class CancelMessage(BaseModel):
    """Request to stop a running generation after the current icon."""

    type: Literal["cancel"] = "cancel"


UiMessage = Annotated[Union[GenerateMessage, CancelMessage], Field(discriminator="type")]

_ui_message_adapter = TypeAdapter(UiMessage)


def parse_ui_message(payload: Any) -> GenerateMessage | CancelMessage:
    """Validate an inbound payload.

    Raises
    ------
    pydantic.ValidationError
        If the payload has an unknown ``type`` or malformed fields.
    """
    return _ui_message_adapter.validate_python(payload)


class ErrorMessage(BaseModel):
    """Outbound error shown inline by the UI."""

    type: Literal["error"] = "error"
    message: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump()


class DefaultsMessage(BaseModel):
    """Outbound initial state of the variant form."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["defaults"] = "defaults"
    variants: list[VariantRow]
    custom_stroke: bool = Field(False, alias="customStroke")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class DoneMessage(BaseModel):
    """Outbound summary of a finished (or cancelled) run."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["done"] = "done"
    component_sets: int = Field(..., ge=0, alias="componentSets")
    variants_per_set: int = Field(..., ge=0, alias="variantsPerSet")
    cancelled: bool = False

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
