"""Migration environment for the TimeMaster SQL backend.

The target URL is DATABASE_URL, the same one SqlStore connects to when
STORAGE_BACKEND=sql. Autogenerate compares against the per-user record,
settings and id-counter tables declared in timemaster.models.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from timemaster.config import settings
from timemaster.database import Base

# users, categories, tasks, time_blocks, pomodoro_sessions, user_settings, record_counters
import timemaster.models  # noqa: F401

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit SQL for DATABASE_URL without connecting."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
