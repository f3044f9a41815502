"""Pydantic models for playlist items, history commands and engine state."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, Literal


class Item(BaseModel):
    """A playlist entry. Ids are assigned by the engine and never reused."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class AddCommand(BaseModel):
    """An item appended to the end of the playlist."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["add"] = "add"
    item: Item


class RemoveCommand(BaseModel):
    """An item removed from the playlist, with the position it held."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["remove"] = "remove"
    item: Item
    index: int = Field(ge=0, description="0-indexed position before removal")


class ClearCommand(BaseModel):
    """The whole playlist emptied at once."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["clear"] = "clear"
    removed_items: tuple[Item, ...] = Field(min_length=1)


Command = Annotated[AddCommand | RemoveCommand | ClearCommand, Field(discriminator="kind")]


class EngineState(BaseModel):
    """Live playlist plus undo (past) and redo (future) stacks; top is the last element."""

    items: list[Item] = Field(default_factory=list)
    past: list[Command] = Field(default_factory=list)
    future: list[Command] = Field(default_factory=list)


class PlaylistSnapshot(BaseModel):
    """Serializable copy of the current items for an external store."""

    items: list[Item] = Field(default_factory=list)


class HistoryChangedEvent(BaseModel):
    """Event delivered to listeners after the playlist or its history changes."""

    action: Literal["added", "removed", "cleared", "undone", "redone", "restored"]
    item_ids: list[str] = Field(default_factory=list, description="Ids touched by the change")
    item_count: int = Field(ge=0)
    can_undo: bool
    can_redo: bool
