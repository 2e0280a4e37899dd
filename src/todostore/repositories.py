from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from threading import RLock
from typing import List, Optional

from .models import Todo
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def find_all(self) -> List[Todo]:
        """Return every stored Todo, in backend order."""

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        """Return a Todo by id, or None if not found."""

    @abstractmethod
    def save(self, todo: Todo) -> Todo:
        """
        Insert or update a Todo and return the persisted representation.
        A Todo without an id gets one assigned.
        """

    @abstractmethod
    def delete_by_id(self, todo_id: int) -> None:
        """Delete a Todo by id. Unknown ids are ignored."""

    @abstractmethod
    def exists_by_id(self, todo_id: int) -> bool:
        """Return True if a Todo with this id is stored."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, Todo] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def find_all(self) -> List[Todo]:
        with self._lock:
            # Return copies to avoid external mutation
            return [t.model_copy() for t in self._items.values()]

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.model_copy()

    def save(self, todo: Todo) -> Todo:
        with self._lock:
            if todo.id is None:
                stored = todo.model_copy(update={"id": self._allocate_id()})
            else:
                stored = todo.model_copy()
                # Keep explicit ids from colliding with later allocations
                self._next_id = max(self._next_id, stored.id + 1)
            self._items[stored.id] = stored
            logger.debug("Saved todo id=%s", stored.id)
            return stored.model_copy()

    def delete_by_id(self, todo_id: int) -> None:
        with self._lock:
            if self._items.pop(todo_id, None) is not None:
                logger.debug("Deleted todo id=%s", todo_id)

    def exists_by_id(self, todo_id: int) -> bool:
        with self._lock:
            return todo_id in self._items


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository (sqlite3 standard library)

    The instance is cached so every caller shares the same storage; call
    get_repository.cache_clear() after changing settings.
    """
    settings = get_settings()
    if settings.persistence_backend == "sqlite":
        from .db import SQLiteRepository

        logger.info("Using sqlite repository at %s", settings.sqlite_db_path)
        return SQLiteRepository(settings.sqlite_db_path)
    logger.info("Using in-memory repository")
    return InMemoryRepository()
