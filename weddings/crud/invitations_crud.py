# weddings/crud/invitations_crud.py

# =================================================================================
# 🧩 CRUD de Invitaciones (Invitation)
# - list_with_guests / get_by_id: lecturas (None = no existe).
# - create: invitation_id aleatorio de 6 dígitos, con comprobación previa y
#   reintento ante choque con la PK (IntegrityError).
# - edit: nombre y comentario. El estado NUNCA se edita directamente.
# - apply_rsvp: edición en lote de invitados + comentario + estado recalculado,
#   todo en una transacción.
# - delete: borra los invitados y luego la invitación, en una transacción.
# =================================================================================

import os
import secrets
from typing import Any, Iterable, List, Mapping, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from weddings.crud import guests_crud
from weddings.exceptions import InvitationIdExhaustedError
from weddings.models import (
    INVITATION_ID_MAX,
    INVITATION_ID_MIN,
    Invitation,
    InvitationStatusEnum,
)

INVITATION_ID_ATTEMPTS = int(os.getenv("INVITATION_ID_ATTEMPTS", "5"))

# ---------------------------------------------------------------------------------
# 🎲 Generador de identificadores
# ---------------------------------------------------------------------------------

def _random_invitation_id() -> int:
    return INVITATION_ID_MIN + secrets.randbelow(INVITATION_ID_MAX - INVITATION_ID_MIN + 1)

# ---------------------------------------------------------------------------------
# 🔎 Lecturas
# ---------------------------------------------------------------------------------

def list_with_guests(db: Session) -> List[Invitation]:
    """Todas las invitaciones con sus invitados cargados en una sola consulta extra."""
    stmt = select(Invitation).options(selectinload(Invitation.guests))
    return list(db.scalars(stmt).all())


def get_by_id(db: Session, invitation_id: int) -> Optional[Invitation]:
    return db.get(Invitation, invitation_id)

# ---------------------------------------------------------------------------------
# 🆕 Alta
# ---------------------------------------------------------------------------------

def create(
    db: Session,
    *,
    name: str,
    comment: Optional[str] = None,
    attempts: Optional[int] = None,
) -> Invitation:
    """
    Crea una invitación en estado Pending (aún no tiene invitados).

    El id se elige al azar entre 100000 y 999999. La comprobación previa evita
    la mayoría de choques; si aun así otro proceso inserta el mismo id antes,
    la PK lo rechaza y se reintenta con otro valor.
    """
    max_attempts = attempts or INVITATION_ID_ATTEMPTS
    last_error: Optional[IntegrityError] = None

    for attempt in range(1, max_attempts + 1):
        invitation_id = _random_invitation_id()
        if get_by_id(db, invitation_id) is not None:
            logger.debug("CRUD/invitations.create → id ocupado (intento {})", attempt)
            continue

        invitation = Invitation(
            invitation_id=invitation_id,
            name=(name or "").strip(),
            status=InvitationStatusEnum.pending,
            comment=(comment or ""),
        )
        db.add(invitation)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            last_error = exc
            logger.warning(
                "CRUD/invitations.create → choque de PK invitation_id={} (intento {}/{})",
                invitation_id, attempt, max_attempts,
            )
            continue
        except Exception:
            db.rollback()
            raise

        db.refresh(invitation)
        logger.info("CRUD/invitations.create → invitation_id={}", invitation.invitation_id)
        return invitation

    if last_error is not None:
        raise last_error
    raise InvitationIdExhaustedError(max_attempts)

# ---------------------------------------------------------------------------------
# ✏️ Edición
# ---------------------------------------------------------------------------------

def edit(
    db: Session,
    invitation: Invitation,
    *,
    name: Optional[str] = None,
    comment: Optional[str] = None,
) -> Invitation:
    """Edita nombre y/o comentario; None = sin cambios."""
    if name is not None:
        invitation.name = name.strip()
    if comment is not None:
        invitation.comment = comment
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(invitation)
    return invitation


def apply_rsvp(
    db: Session,
    invitation: Invitation,
    *,
    comment: Optional[str],
    guest_updates: Iterable[Mapping[str, Any]],
) -> Invitation:
    """
    Respuesta RSVP de una invitación: edita los invitados en lote, guarda el
    comentario y recalcula el estado agregado desde la BD. Todo o nada.

    Precondición (la valida la ruta): todos los guest_id pertenecen a la invitación.
    """
    try:
        applied = guests_crud.bulk_update(db, guest_updates, commit=False)
        invitation.comment = comment or ""
        guests_crud.sync_invitation_status(db, invitation.invitation_id)
        db.commit()
    except Exception:
        db.rollback()
        logger.warning("CRUD/invitations.apply_rsvp → rollback | invitation_id={}", invitation.invitation_id)
        raise
    db.refresh(invitation)
    logger.info(
        "CRUD/invitations.apply_rsvp → invitation_id={} guests={} status={}",
        invitation.invitation_id, applied, invitation.status.value,
    )
    return invitation

# ---------------------------------------------------------------------------------
# 🗑️ Borrado
# ---------------------------------------------------------------------------------

def delete(db: Session, invitation_id: int) -> int:
    """Borra los invitados y la invitación. Devuelve filas de invitación borradas."""
    invitation = get_by_id(db, invitation_id)
    if invitation is None:
        return 0
    try:
        removed_guests = guests_crud.delete_by_invitation(db, invitation_id, commit=False)
        db.expire(invitation, ["guests"])  # la colección cargada apunta a filas ya borradas
        db.delete(invitation)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("CRUD/invitations.delete → invitation_id={} guests_borrados={}", invitation_id, removed_guests)
    return 1
