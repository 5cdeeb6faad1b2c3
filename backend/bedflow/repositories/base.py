"""
Base in-memory registry.
Provides generic storage, lookup and id generation.
"""
from typing import TypeVar, Generic, Optional, List, Dict
from itertools import count
import threading

from bedflow.core.events import EventBroadcaster

T = TypeVar("T")


class BaseRegistry(Generic[T]):
    """
    Generic in-memory registry keyed by id.

    All registries of one service root share the same lock and the same
    broadcaster, so a multi-step operation can hold the lock across them.

    Usage:
        class MyRegistry(BaseRegistry[MyModel]):
            def __init__(self, lock, broadcaster):
                super().__init__(lock, broadcaster, id_prefix="M")
    """

    def __init__(
        self,
        lock: threading.RLock,
        broadcaster: EventBroadcaster,
        id_prefix: str,
    ):
        """
        Initializes the registry.

        Args:
            lock: Mutual exclusion domain shared by the service root
            broadcaster: Sink notified after committed mutations
            id_prefix: Prefix of generated ids
        """
        self.lock = lock
        self.broadcaster = broadcaster
        self.id_prefix = id_prefix
        self._items: Dict[str, T] = {}
        self._sequence = count(1)

    def next_id(self) -> str:
        """
        Generates a fresh id.

        The counter only moves forward, so an id is never handed out twice
        in the lifetime of the registry.
        """
        with self.lock:
            while True:
                candidate = f"{self.id_prefix}-{next(self._sequence)}"
                if candidate not in self._items:
                    return candidate

    def get_by_id(self, id: str) -> Optional[T]:
        """
        Gets an item by id.

        Args:
            id: Item id

        Returns:
            The item or None if it does not exist
        """
        return self._items.get(id)

    def get_all(self) -> List[T]:
        """Returns every stored item."""
        with self.lock:
            return list(self._items.values())

    def exists(self, id: str) -> bool:
        return id in self._items

    def count(self) -> int:
        """Number of stored items."""
        return len(self._items)

    def clear(self) -> None:
        """Drops every item without notifying observers."""
        with self.lock:
            self._items.clear()
