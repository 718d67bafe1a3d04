#migrations/env.py
from logging.config import fileConfig
import os
import sys

from alembic import context

# ---- Asegurar que podamos importar el paquete "weddings" ----
# (asume que "migrations" está en la raíz del proyecto junto a "weddings/")
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dotenv import load_dotenv

load_dotenv(os.path.join(ROOT_DIR, ".env"))

from weddings.db import Base, build_engine, resolve_database_url
from weddings import models  # noqa: F401  (registra las tablas en Base.metadata)

# Alembic Config (lee alembic.ini para logging, etc.)
config = context.config

# Logging de Alembic (opcional)
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Metadata de los modelos para autogenerate
target_metadata = Base.metadata

# La URL sale de DATABASE_URL (misma política FORCE_DB que la API).
DATABASE_URL = resolve_database_url()


def run_migrations_offline() -> None:
    """
    Modo 'offline': configura el contexto solo con la URL.
    No crea Engine/DBAPI; emite SQL al output.
    """
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,      # detecta cambios de tipos
        compare_server_default=True,  # detecta defaults en servidor
        render_as_batch=DATABASE_URL.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Modo 'online': construye el Engine del proyecto y ejecuta contra la BD.
    """
    connectable = build_engine(DATABASE_URL)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",  # SQLite no soporta ALTER completos
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
