from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from .models import Todo
from .repositories import Repository, get_repository


# PUBLIC_INTERFACE
class TodoStore:
    """
    Stateless service in front of a Repository.

    The one rule applied here: a Todo saved without created_at gets the
    current time. Everything else is delegated, and repository errors
    propagate unchanged.
    """

    def __init__(self, repo: Repository, clock: Callable[[], datetime] = datetime.now) -> None:
        self._repo = repo
        self._clock = clock

    def find_all(self) -> List[Todo]:
        return self._repo.find_all()

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        return self._repo.find_by_id(todo_id)

    def save(self, todo: Todo) -> Todo:
        """
        Persist a Todo, stamping created_at on the given object when unset.

        Returns the repository's persisted representation, which carries the
        assigned id for new records.
        """
        if todo.created_at is None:
            todo.created_at = self._clock()
        return self._repo.save(todo)

    def delete_by_id(self, todo_id: int) -> None:
        self._repo.delete_by_id(todo_id)

    def exists_by_id(self, todo_id: int) -> bool:
        return self._repo.exists_by_id(todo_id)


# PUBLIC_INTERFACE
def get_todo_store() -> TodoStore:
    """Return a TodoStore wired to the configured repository."""
    return TodoStore(get_repository())
