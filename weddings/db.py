# weddings/db.py
# =================================================================================
# 🗄️ CONFIGURACIÓN Y CONEXIÓN A LA BASE DE DATOS
# ---------------------------------------------------------------------------------
# Este módulo centraliza la construcción del engine de SQLAlchemy y la fábrica de
# sesiones. No existe una conexión global: `create_app` construye su propio
# engine y lo guarda en `app.state`; cada request recibe su sesión vía `get_db`.
# Soporta SQLite (desarrollo/tests) y PostgreSQL/MySQL (producción).
# =================================================================================

# --- Importaciones de Módulos ---
import os
from typing import Iterator, Optional

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


# --- Lógica de URL de la Base de Datos ---
def resolve_database_url(raw_url: Optional[str] = None) -> str:
    """Devuelve la URL efectiva de la BD aplicando la política FORCE_DB."""
    url = (raw_url if raw_url is not None else os.getenv("DATABASE_URL", "")).strip()
    force_db = os.getenv("FORCE_DB", "postgres").strip().lower()

    # Placeholder de plataforma sin resolver (p. ej. "${{ Postgres.DATABASE_URL }}").
    if url.startswith("${{") and url.endswith("}}"):
        logger.warning("DATABASE_URL parece un placeholder sin resolver: {}", url)
        url = ""

    if url:
        return url

    if force_db == "postgres":
        # Si se exige PostgreSQL, se detiene el arranque para evitar usar una BD incorrecta.
        raise RuntimeError(
            "FATAL: DATABASE_URL no está disponible y FORCE_DB=postgres. "
            "Se aborta para evitar un fallback accidental a SQLite en producción."
        )

    logger.warning("DATABASE_URL está vacía. Usando fallback a SQLite local.")
    current_dir = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.abspath(os.path.join(current_dir, ".."))
    db_path = os.path.join(project_root, "weddings.db")
    return f"sqlite:///{db_path}"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignora ON DELETE SET NULL si no se activa el pragma por conexión.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# --- Creación del Engine con Lógica Condicional y Resiliencia ---
def build_engine(database_url: str, **engine_kwargs) -> Engine:
    """Crea el engine para la URL dada (SQLite necesita `check_same_thread`)."""
    if database_url.startswith("sqlite"):
        logger.info("DB in use → SQLite")
        connect_args = engine_kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(
            database_url,
            connect_args=connect_args,
            pool_pre_ping=True,
            **engine_kwargs,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    logger.info("DB in use → PostgreSQL/MySQL (no-SQLite)")
    return create_engine(database_url, pool_pre_ping=True, **engine_kwargs)


# --- Fábrica de Sesiones ---
def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Dependencia de FastAPI para inyectar una sesión de BD por petición."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


# =================================================================================
# 🔎 UTILIDAD: LOGUEAR LA RUTA REAL DE LA BASE DE DATOS EN STARTUP
# =================================================================================
def log_db_path_on_startup(engine: Engine) -> None:
    """Escribe en los logs qué motor de base de datos se está utilizando al arrancar."""
    url = engine.url
    logger.info("DB driver in use → {}", url.drivername)
    if url.drivername.startswith("sqlite"):
        db_file = url.database
        abs_path = os.path.abspath(db_file) if db_file and db_file != ":memory:" else "<memory>"
        logger.info("DB path → {} (abs={})", db_file, abs_path)
