"""Exceptions raised by the playlist history engine."""


class PlaylistHistoryError(Exception):
    """Base class for playlist history errors."""


class InvalidInputError(PlaylistHistoryError, ValueError):
    """Raised when a caller supplies input the engine refuses to record.

    Only item creation (blank names) and restoring a playlist (duplicate ids)
    raise this; every other stale or unknown request is a no-op.
    """
