# create_db.py

# =================================================================================
# 🏗️ SCRIPT DE CREACIÓN DE LA BASE DE DATOS
# ---------------------------------------------------------------------------------
# Crea las tablas definidas en weddings/models.py y da de alta las cuentas de
# operador indicadas en SEED_USERS ("usuario:contraseña,usuario2:contraseña2").
# Los usuarios que ya existen se saltan, así que se puede ejecutar varias veces.
# En producción el esquema lo lleva Alembic (`alembic upgrade head`); este script
# es para preparar una BD local rápidamente.
# =================================================================================

import os
from pathlib import Path
from typing import List, Tuple

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(".") / ".env")

from weddings.db import Base, build_engine, build_session_factory, resolve_database_url
from weddings import models  # noqa: F401  (registra las tablas en Base.metadata)
from weddings.crud import users_crud


def parse_seed_users(raw: str) -> List[Tuple[str, str]]:
    """'ana:pw1, luis:pw2' → [('ana', 'pw1'), ('luis', 'pw2')]; ignora entradas mal formadas."""
    pairs = []
    for chunk in (raw or "").split(","):
        username, sep, password = chunk.strip().partition(":")
        if sep and username.strip() and password:
            pairs.append((username.strip(), password))
    return pairs


def create_database_tables(engine) -> None:
    print("Creando tablas en la base de datos...")
    Base.metadata.create_all(bind=engine)
    print("✔️ Tablas users, invitations y guests creadas correctamente.")


def seed_users(session_factory, users: List[Tuple[str, str]]) -> int:
    created = 0
    with session_factory() as db:
        for username, password in users:
            if users_crud.get_by_username(db, username) is not None:
                print(f"• Usuario {username} ya existe, se omite.")
                continue
            users_crud.create(db, username=username, password=password)
            print(f"✔️ Usuario {username} insertado con éxito.")
            created += 1
    return created


if __name__ == "__main__":
    engine = build_engine(resolve_database_url())
    create_database_tables(engine)
    users = parse_seed_users(os.getenv("SEED_USERS", ""))
    if not users:
        print("⚠️ SEED_USERS vacío: no se crea ningún operador.")
    else:
        seed_users(build_session_factory(engine), users)
