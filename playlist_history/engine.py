import threading
from collections.abc import Callable, Iterable
from eliot import start_action
from playlist_history import config
from playlist_history.commands import apply_forward, apply_inverse, index_of
from playlist_history.errors import InvalidInputError
from playlist_history.ids import ItemIdFactory
from playlist_history.logging import log_error, log_history_noop, log_history_operation, log_invalid_input
from playlist_history.models import (
    AddCommand,
    ClearCommand,
    Command,
    EngineState,
    HistoryChangedEvent,
    Item,
    PlaylistSnapshot,
    RemoveCommand,
)
from pydantic import TypeAdapter, ValidationError

HistoryListener = Callable[[HistoryChangedEvent], None]

_ITEM_LIST = TypeAdapter(list[Item])


class PlaylistHistoryEngine:
    """Manages an in-memory playlist with linear undo/redo (session-only, not persisted)."""

    def __init__(self, id_factory: ItemIdFactory | None = None):
        self.state = EngineState()
        self.id_factory = id_factory or ItemIdFactory(config.ID_PREFIX)
        self._listeners: list[HistoryListener] = []
        self._lock = threading.RLock()  # Reentrant lock for thread-safe operations

    def add_item(self, name: str) -> Item:
        """Append a new item to the end of the playlist.

        Args:
            name: Display name; must not be blank

        Returns:
            The created item

        Raises:
            InvalidInputError: If name is not a string or is blank
        """
        if not isinstance(name, str) or not name.strip():
            error = InvalidInputError("Item name must be a non-empty string")
            log_invalid_input("add", error, name=repr(name))
            raise error

        with self._lock, start_action(action_type="playlist_history:add"):
            # One id per add, shared by the live item and its history entry
            item = Item(id=self.id_factory.next_id(), name=name)
            self.state.items.append(item)
            self._record(AddCommand(item=item))
            log_history_operation("add", item_id=item.id, **self._depths())
            event = self._event("added", [item.id])

        self._notify(event)
        return item

    def remove_item(self, item_id: str) -> None:
        """Remove an item by id. Unknown ids are ignored and leave no history entry.

        Args:
            item_id: Id of the item to remove
        """
        with self._lock, start_action(action_type="playlist_history:remove", item_id=item_id):
            index = index_of(self.state.items, item_id)
            if index is None:
                log_history_noop("remove", "unknown item id", item_id=item_id)
                return

            item = self.state.items.pop(index)
            self._record(RemoveCommand(item=item, index=index))
            log_history_operation("remove", item_id=item_id, index=index, **self._depths())
            event = self._event("removed", [item_id])

        self._notify(event)

    def clear_all(self) -> None:
        """Remove every item. Clearing an empty playlist leaves no history entry."""
        with self._lock, start_action(action_type="playlist_history:clear"):
            if not self.state.items:
                log_history_noop("clear", "playlist already empty")
                return

            removed = tuple(self.state.items)
            self.state.items.clear()
            self._record(ClearCommand(removed_items=removed))
            log_history_operation("clear", count=len(removed), **self._depths())
            event = self._event("cleared", [item.id for item in removed])

        self._notify(event)

    def undo(self) -> bool:
        """Reverse the most recent command.

        Returns:
            True if a command was undone, False if there was nothing to undo
        """
        with self._lock, start_action(action_type="playlist_history:undo"):
            if not self.state.past:
                log_history_noop("undo", "nothing to undo")
                return False

            command = self.state.past.pop()
            apply_inverse(self.state.items, command)
            self.state.future.append(command)
            log_history_operation("undo", kind=command.kind, **self._depths())
            event = self._event("undone", _command_item_ids(command))

        self._notify(event)
        return True

    def redo(self) -> bool:
        """Reapply the most recently undone command.

        Returns:
            True if a command was redone, False if there was nothing to redo
        """
        with self._lock, start_action(action_type="playlist_history:redo"):
            if not self.state.future:
                log_history_noop("redo", "nothing to redo")
                return False

            command = self.state.future.pop()
            apply_forward(self.state.items, command)
            self.state.past.append(command)
            log_history_operation("redo", kind=command.kind, **self._depths())
            event = self._event("redone", _command_item_ids(command))

        self._notify(event)
        return True

    def restore_items(self, items: Iterable[Item | dict]) -> None:
        """Replace the playlist (e.g. from a saved snapshot) and forget all history.

        Args:
            items: Items to load, in display order; Item instances or their dict form

        Raises:
            InvalidInputError: If an item is malformed or two items share an id
        """
        try:
            items = _ITEM_LIST.validate_python(list(items))
        except ValidationError as e:
            error = InvalidInputError(f"Restored items are invalid: {e.error_count()} error(s)")
            log_invalid_input("restore", error, details=str(e))
            raise error from e

        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            error = InvalidInputError("Restored items must have unique ids")
            log_invalid_input("restore", error, count=len(items))
            raise error

        with self._lock, start_action(action_type="playlist_history:restore", count=len(items)):
            self.id_factory.reserve(ids)
            self.state = EngineState(items=items)
            log_history_operation("restore", count=len(items), **self._depths())
            event = self._event("restored", ids)

        self._notify(event)

    def snapshot(self) -> PlaylistSnapshot:
        """Get a serializable copy of the current items."""
        with self._lock:
            return PlaylistSnapshot(items=list(self.state.items))

    def current_items(self) -> list[Item]:
        """Get the playlist in display order.

        Returns:
            Copy of the current items
        """
        with self._lock:
            return list(self.state.items)

    def can_undo(self) -> bool:
        with self._lock:
            return bool(self.state.past)

    def can_redo(self) -> bool:
        with self._lock:
            return bool(self.state.future)

    def undo_depth(self) -> int:
        with self._lock:
            return len(self.state.past)

    def redo_depth(self) -> int:
        with self._lock:
            return len(self.state.future)

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a callback invoked after every change.

        Args:
            listener: Called with a HistoryChangedEvent

        Returns:
            Function that unregisters the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _record(self, command: Command) -> None:
        # A new command starts a new timeline; anything undone is gone
        self.state.past.append(command)
        self.state.future.clear()

    def _depths(self) -> dict[str, int]:
        return {"undo_depth": len(self.state.past), "redo_depth": len(self.state.future)}

    def _event(self, action: str, item_ids: list[str]) -> HistoryChangedEvent:
        return HistoryChangedEvent(
            action=action,
            item_ids=item_ids,
            item_count=len(self.state.items),
            can_undo=self.can_undo(),
            can_redo=self.can_redo(),
        )

    def _notify(self, event: HistoryChangedEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                log_error(e, action=event.action)
                raise


def _command_item_ids(command: Command) -> list[str]:
    if isinstance(command, ClearCommand):
        return [item.id for item in command.removed_items]
    return [command.item.id]
