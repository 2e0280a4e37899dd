"""
Todo store package.

Exposes the TodoStore service, the Todo record and the repository contract
for convenience imports (e.g. `from todostore import TodoStore`).
"""

from .models import Todo
from .repositories import InMemoryRepository, Repository, get_repository
from .services import TodoStore, get_todo_store
from .settings import configure_logging, get_settings

__all__ = [
    "InMemoryRepository",
    "Repository",
    "Todo",
    "TodoStore",
    "configure_logging",
    "get_repository",
    "get_settings",
    "get_todo_store",
]
