# weddings/crud/guests_crud.py                                                 # Ruta del archivo dentro del proyecto.

# =================================================================================
# 🧩 CRUD de Invitados (Guest)
# - Lecturas: list_all / list_by_invitation / get_by_id (None = no existe).
# - Escrituras: create / update (edición simple) / bulk_update (edición en lote
#   atómica) / delete / delete_by_invitation.
# - Cada escritura que cambia el conjunto o el estado de los invitados recalcula
#   el estado agregado de su invitación en la MISMA transacción.
# - Los errores de BD nunca se tragan: rollback y se relanzan al llamador.
# =================================================================================

from typing import Any, Dict, Iterable, List, Mapping, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from weddings.exceptions import GuestNotFoundError
from weddings.models import (
    Guest,
    GuestStatusEnum,
    Invitation,
    InvitationStatusEnum,
    MenuTypeEnum,
    NeedsEnum,
    NightsNeededEnum,
)
from weddings.status import derive_invitation_status

# Campos que una edición (simple o en lote) puede tocar.
EDITABLE_FIELDS = (
    "full_name",
    "menu_type",
    "menu_kids",
    "needs",
    "status",
    "nights_needed",
    "estimated_partecipation",
)

# ---------------------------------------------------------------------------------
# 🛡️ Helpers internos
# ---------------------------------------------------------------------------------

def _clean_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Filtra los campos editables; un valor None significa 'sin cambios'."""
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Campos no editables: {', '.join(sorted(unknown))}")
    cleaned = {k: v for k, v in fields.items() if v is not None}
    if "full_name" in cleaned:
        cleaned["full_name"] = cleaned["full_name"].strip()
    return cleaned


def sync_invitation_status(db: Session, invitation_id: Optional[int]) -> Optional[InvitationStatusEnum]:
    """
    Recalcula y asigna el estado agregado a partir de los invitados PERSISTIDOS
    (hace flush antes de leer). No hace commit: lo decide el llamador.
    """
    if invitation_id is None:
        return None
    invitation = db.get(Invitation, invitation_id)
    if invitation is None:
        return None
    db.flush()
    statuses = db.scalars(select(Guest.status).where(Guest.invitation_id == invitation_id)).all()
    invitation.status = derive_invitation_status(statuses)
    logger.debug(
        "CRUD/guests.sync_invitation_status → invitation_id={} guests={} status={}",
        invitation_id, len(statuses), invitation.status.value,
    )
    return invitation.status

# ---------------------------------------------------------------------------------
# 🔎 Lecturas
# ---------------------------------------------------------------------------------

def list_all(db: Session) -> List[Guest]:
    return list(db.scalars(select(Guest)).all())


def list_by_invitation(db: Session, invitation_id: int) -> List[Guest]:
    """Invitados de una invitación (lista vacía si no hay ninguno)."""
    return list(db.scalars(select(Guest).where(Guest.invitation_id == invitation_id)).all())


def get_by_id(db: Session, guest_id: int) -> Optional[Guest]:
    return db.get(Guest, guest_id)

# ---------------------------------------------------------------------------------
# 🆕 Alta
# ---------------------------------------------------------------------------------

def create(
    db: Session,
    *,
    invitation_id: int,
    full_name: str,
    estimated_partecipation: bool = True,
    menu_type: MenuTypeEnum = MenuTypeEnum.standard,
    menu_kids: bool = False,
    needs: NeedsEnum = NeedsEnum.autonomous,
    status: GuestStatusEnum = GuestStatusEnum.pending,
    nights_needed: NightsNeededEnum = NightsNeededEnum.none,
) -> Guest:
    """Crea un invitado; el guest_id lo asigna la BD."""
    guest = Guest(
        invitation_id=invitation_id,
        full_name=(full_name or "").strip(),
        menu_type=menu_type,
        menu_kids=bool(menu_kids),
        needs=needs,
        status=status,
        nights_needed=nights_needed,
        estimated_partecipation=bool(estimated_partecipation),
    )
    db.add(guest)
    try:
        db.flush()
        sync_invitation_status(db, invitation_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(guest)
    logger.info("CRUD/guests.create → guest_id={} invitation_id={}", guest.guest_id, invitation_id)
    return guest

# ---------------------------------------------------------------------------------
# ✏️ Edición simple y en lote
# ---------------------------------------------------------------------------------

def update(db: Session, guest: Guest, **fields: Any) -> Guest:
    """Edición parcial de un invitado; los campos ausentes quedan como estaban."""
    changes = _clean_fields(fields)
    for name, value in changes.items():
        setattr(guest, name, value)
    try:
        if "status" in changes:
            sync_invitation_status(db, guest.invitation_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(guest)
    logger.info("CRUD/guests.update → guest_id={} campos={}", guest.guest_id, sorted(changes))
    return guest


def bulk_update(db: Session, updates: Iterable[Mapping[str, Any]], *, commit: bool = True) -> int:
    """
    Aplica un lote de ediciones parciales como una unidad atómica.

    Cada registro lleva `guest_id` y cero o más campos de EDITABLE_FIELDS. Si un
    guest_id no existe se lanza GuestNotFoundError; cualquier fallo deja la BD
    como estaba. Con commit=False el llamador es dueño de la transacción (y del
    rollback) y también del recálculo del estado; con commit=True se recalcula
    aquí el estado de cada invitación tocada. Devuelve el número de registros
    aplicados.
    """
    applied = 0
    touched_invitations = set()
    try:
        for record in updates:
            fields = dict(record)
            guest_id = fields.pop("guest_id")
            changes = _clean_fields(fields)
            guest = db.get(Guest, guest_id)
            if guest is None:
                raise GuestNotFoundError(guest_id)
            for name, value in changes.items():
                setattr(guest, name, value)
            touched_invitations.add(guest.invitation_id)
            applied += 1
        db.flush()
        if commit:
            for invitation_id in touched_invitations:
                sync_invitation_status(db, invitation_id)
            db.commit()
    except Exception:
        if commit:
            db.rollback()
        logger.warning("CRUD/guests.bulk_update → lote abortado tras {} registros", applied)
        raise
    logger.info("CRUD/guests.bulk_update → {} invitados actualizados", applied)
    return applied

# ---------------------------------------------------------------------------------
# 🗑️ Borrado
# ---------------------------------------------------------------------------------

def delete(db: Session, guest_id: int) -> int:
    """Borra un invitado. Devuelve las filas borradas (0 si no existía)."""
    guest = db.get(Guest, guest_id)
    if guest is None:
        return 0
    invitation_id = guest.invitation_id
    db.delete(guest)
    try:
        sync_invitation_status(db, invitation_id)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("CRUD/guests.delete → guest_id={} invitation_id={}", guest_id, invitation_id)
    return 1


def delete_by_invitation(db: Session, invitation_id: int, *, commit: bool = True) -> int:
    """Borra todos los invitados de una invitación. Devuelve cuántos se borraron."""
    guests = list_by_invitation(db, invitation_id)
    try:
        for guest in guests:
            db.delete(guest)
        db.flush()
        if commit:
            db.commit()
    except Exception:
        if commit:
            db.rollback()
        raise
    return len(guests)
