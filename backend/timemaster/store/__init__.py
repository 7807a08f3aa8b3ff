"""Storage backends behind one contract (see ``timemaster.store.base``)."""
import logging

from timemaster.config import Settings
from timemaster.database import create_engine_for
from timemaster.store.base import (
    CATEGORIES,
    COLLECTIONS,
    POMODORO_SESSIONS,
    TASKS,
    TIME_BLOCKS,
    IdentityStore,
    RecordStore,
    Store,
    UserAccount,
)
from timemaster.store.json_store import JsonStore
from timemaster.store.sql_store import SqlStore

logger = logging.getLogger(__name__)

__all__ = [
    "CATEGORIES",
    "COLLECTIONS",
    "POMODORO_SESSIONS",
    "TASKS",
    "TIME_BLOCKS",
    "IdentityStore",
    "RecordStore",
    "Store",
    "UserAccount",
    "JsonStore",
    "SqlStore",
    "build_store",
]


def build_store(config: Settings) -> Store:
    """Instantiate the backend named by ``STORAGE_BACKEND``."""
    backend = config.STORAGE_BACKEND.lower()
    if backend == "json":
        return JsonStore(config.JSON_DB_PATH)
    if backend == "sql":
        # SQLite runs in dev mode without migrations; other databases use alembic.
        engine = create_engine_for(config.DATABASE_URL)
        return SqlStore(engine, create_schema=config.DATABASE_URL.startswith("sqlite"))
    raise ValueError(f"Unknown STORAGE_BACKEND: {config.STORAGE_BACKEND!r}")
