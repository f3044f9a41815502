"""Forward and inverse application of history commands.

Both paths dispatch over the closed ``Command`` union; a new command kind that
is not handled here fails type checking at the ``assert_never`` branch.
"""

from collections.abc import Iterable
from playlist_history.models import AddCommand, ClearCommand, Command, Item, RemoveCommand
from typing import assert_never


def index_of(items: list[Item], item_id: str) -> int | None:
    """Get the position of an item by id.

    Args:
        items: Playlist items
        item_id: Id to look up

    Returns:
        Index of the item, or None if not present
    """
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


def _discard(items: list[Item], item_id: str) -> None:
    index = index_of(items, item_id)
    if index is not None:
        items.pop(index)


def apply_forward(items: list[Item], command: Command) -> None:
    """Apply the effect a command had when it was first issued.

    Args:
        items: Playlist items, mutated in place
        command: Command to (re)apply
    """
    if isinstance(command, AddCommand):
        items.append(command.item)
    elif isinstance(command, RemoveCommand):
        _discard(items, command.item.id)
    elif isinstance(command, ClearCommand):
        items.clear()
    else:
        assert_never(command)


def apply_inverse(items: list[Item], command: Command) -> None:
    """Reverse a command's effect.

    A removed item goes back to the index it held, so undoing and redoing in any
    order reproduces the same playlist.

    Args:
        items: Playlist items, mutated in place
        command: Command to undo
    """
    if isinstance(command, AddCommand):
        _discard(items, command.item.id)
    elif isinstance(command, RemoveCommand):
        items.insert(min(command.index, len(items)), command.item)
    elif isinstance(command, ClearCommand):
        items[:] = list(command.removed_items)
    else:
        assert_never(command)


def replay_history(commands: Iterable[Command]) -> list[Item]:
    """Rebuild a playlist by applying commands forward, starting from empty."""
    items: list[Item] = []
    for command in commands:
        apply_forward(items, command)
    return items
