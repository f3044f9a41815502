"""Unique id generation for playlist items."""

import itertools
from collections.abc import Iterable


class ItemIdFactory:
    """Issues ids of the form ``{prefix}-{n}`` that are unique for the factory's lifetime.

    The counter only moves forward, so issued ids never repeat. Ids restored from
    outside (e.g. a saved playlist) can be reserved so the counter skips over them.
    """

    def __init__(self, prefix: str = "item", start: int = 1):
        if not prefix:
            raise ValueError("Id prefix must not be empty")
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._reserved: set[str] = set()

    def next_id(self) -> str:
        """Return a fresh id that has never been issued or reserved.

        Returns:
            New item id
        """
        while True:
            candidate = f"{self.prefix}-{next(self._counter)}"
            if candidate not in self._reserved:
                return candidate

    def reserve(self, ids: Iterable[str]) -> None:
        """Mark externally supplied ids as taken.

        Args:
            ids: Ids already present in the playlist
        """
        self._reserved.update(ids)

    def is_reserved(self, item_id: str) -> bool:
        return item_id in self._reserved

    def reserved_count(self) -> int:
        return len(self._reserved)
