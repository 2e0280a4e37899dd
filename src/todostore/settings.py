from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'memory' (default) or 'sqlite'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/todos.db'
    - LOG_LEVEL: level name for the 'todostore' logger. Default 'INFO'
    """

    persistence_backend: str
    sqlite_db_path: str
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "sqlite"}:
        # Fallback to memory if unsupported
        backend = "memory"

    sqlite_path = _get_env("SQLITE_DB_PATH", "./data/todos.db").strip()

    level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if level not in _LOG_LEVELS:
        level = "INFO"

    return Settings(
        persistence_backend=backend,
        sqlite_db_path=sqlite_path,
        log_level=level,
    )


# PUBLIC_INTERFACE
def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Apply LOG_LEVEL to the package logger and attach a stream handler once.

    Returns the configured 'todostore' logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger("todostore")
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
