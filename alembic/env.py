from logging.config import fileConfig

from sqlalchemy import pool, create_engine
from alembic import context

# Reads .env through config.app_config
from config.app_config import DATABASE_URL
from database.models import Base
from database import lifecycle_models  # noqa: F401  (collaboration tables)

config = context.config

if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _url():
    # DATABASE_URL wins over alembic.ini; ConfigParser needs % escaped
    return DATABASE_URL or config.get_main_option("sqlalchemy.url").replace("%%", "%")


def run_migrations_offline():
    """
    Emit SQL to stdout without connecting.
    """
    context.configure(
        url=_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_url().startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """
    Run migrations against a live connection.
    """
    connectable = create_engine(_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
