"""In-memory playlist with linear undo/redo history."""

from playlist_history.engine import HistoryListener, PlaylistHistoryEngine
from playlist_history.errors import InvalidInputError, PlaylistHistoryError
from playlist_history.ids import ItemIdFactory
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

__version__ = "0.1.0"

__all__ = [
    'AddCommand',
    'ClearCommand',
    'Command',
    'EngineState',
    'HistoryChangedEvent',
    'HistoryListener',
    'InvalidInputError',
    'Item',
    'ItemIdFactory',
    'PlaylistHistoryEngine',
    'PlaylistHistoryError',
    'PlaylistSnapshot',
    'RemoveCommand',
]
