import sys
import os
from logging.config import fileConfig
from sqlalchemy import create_engine, pool
from alembic import context

# Ensure Alembic can find the app packages
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.settings import get_settings  # Pydantic settings with .env already loaded
from config.database import Base
import api.sessions.sessions_model  # noqa: F401
import api.attendance.attendance_records_model  # noqa: F401

# Load Alembic config
config = context.config

# Configure logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

raw_url = get_settings().DATABASE_URL
if not raw_url:
    raise ValueError("DATABASE_URL not set in .env")

# Inject into Alembic config, escaping % for ConfigParser
config.set_main_option("sqlalchemy.url", raw_url.replace("%", "%%"))

DATABASE_URL = raw_url

# Attach model metadata for `--autogenerate`
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=DATABASE_URL.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    engine = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=DATABASE_URL.startswith("sqlite"),
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
