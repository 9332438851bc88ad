from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from db.base import Base
from db.config import normalize_postgres_url, resolve_database_url
from db.models import SitioRecord  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    """
    `alembic -x db_url=...` targets another store; otherwise migrate the one
    the API uses (SITIO_DATABASE_URL, DATABASE_URL, then the SQLite file).
    """

    override = context.get_x_argument(as_dictionary=True).get("db_url")
    if override:
        return normalize_postgres_url(override)
    return resolve_database_url()


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    url = _migration_url()
    _configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )


def run_migrations_online() -> None:
    engine = create_engine(_migration_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place.
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
