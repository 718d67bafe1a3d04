# weddings/routers/invitations.py  # Router de invitaciones (gestión admin + RSVP del invitado).

# =================================================================================
# 💌 Router: Invitaciones
# ---------------------------------------------------------------------------------
# Rutas PROTEGIDAS (sesión de operador):
# - GET/POST /api/invitations, PATCH/DELETE /api/invitations/{id}
# - GET/POST /api/invitations/{id}/guests
# Rutas PÚBLICAS (el invitado conoce su número de invitación de 6 dígitos):
# - GET /api/invitations/{id}  → consulta de la invitación con sus invitados
# - PUT /api/invitations/{id}  → respuesta RSVP (edición en lote atómica)
# =================================================================================

import re
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from loguru import logger
from sqlalchemy.orm import Session

from weddings import schemas
from weddings.core.security import require_user
from weddings.crud import guests_crud, invitations_crud
from weddings.db import get_db
from weddings.models import Invitation

router = APIRouter(prefix="/api/invitations", tags=["invitations"])

_INVITATION_ID_RE = re.compile(r"\d{6}", re.ASCII)

# 🛠️ Helpers locales
# ---------------------------------------------------------------------------------

def _parse_invitation_id(raw: str) -> int:
    """El número de invitación debe tener exactamente 6 dígitos (400 si no)."""
    if not _INVITATION_ID_RE.fullmatch(raw or ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid invitationId")
    return int(raw)


def _load_invitation(db: Session, raw_id: str) -> Invitation:
    invitation = invitations_crud.get_by_id(db, _parse_invitation_id(raw_id))
    if invitation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
    return invitation

# =================================================================================
# 📄 GET /api/invitations: todas las invitaciones con sus invitados
# ---------------------------------------------------------------------------------
@router.get("", response_model=List[schemas.InvitationResponse], dependencies=[Depends(require_user)])
def list_invitations(db: Session = Depends(get_db)):
    invitations = invitations_crud.list_with_guests(db)
    if not invitations:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No invitations found")
    return invitations

# =================================================================================
# 🆕 POST /api/invitations: nueva invitación (nace en Pending)
# ---------------------------------------------------------------------------------
@router.post(
    "",
    response_model=schemas.InvitationCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_user)],
)
def create_invitation(payload: schemas.InvitationCreate, db: Session = Depends(get_db)):
    invitation = invitations_crud.create(db, name=payload.name, comment=payload.comment)
    return schemas.InvitationCreated(invitation_id=invitation.invitation_id)

# =================================================================================
# 🔎 GET /api/invitations/{id}: consulta pública de la invitación
# ---------------------------------------------------------------------------------
@router.get("/{invitation_id}", response_model=schemas.InvitationResponse)
def get_invitation(invitation_id: str, db: Session = Depends(get_db)):
    invitation = _load_invitation(db, invitation_id)
    if not invitation.guests:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No guests found")
    return invitation

# =================================================================================
# 📝 PUT /api/invitations/{id}: respuesta RSVP (pública)
# ---------------------------------------------------------------------------------
@router.put("/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT)
def answer_invitation(
    invitation_id: str,
    payload: schemas.InvitationRSVPUpdate,
    db: Session = Depends(get_db),
) -> Response:
    """
    Aplica los cambios de todos los invitados en una sola transacción y recalcula
    el estado agregado de la invitación desde la BD (nunca desde el cliente).
    """
    invitation = _load_invitation(db, invitation_id)

    # 1) Todos los guestId enviados deben pertenecer a esta invitación.
    own_ids = {g.guest_id for g in guests_crud.list_by_invitation(db, invitation.invitation_id)}
    foreign = [item.guest_id for item in payload.guests if item.guest_id not in own_ids]
    if foreign:
        logger.info("RSVP rechazado | invitation_id={} | guests_ajenos={}", invitation.invitation_id, foreign)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Some guests are not in the invitation")

    # 2) Lote atómico + estado recalculado.
    invitations_crud.apply_rsvp(
        db,
        invitation,
        comment=payload.comment,
        guest_updates=[item.as_update() for item in payload.guests],
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# =================================================================================
# ✏️ PATCH /api/invitations/{id}: nombre / comentario (admin)
# ---------------------------------------------------------------------------------
@router.patch(
    "/{invitation_id}",
    response_model=schemas.InvitationResponse,
    dependencies=[Depends(require_user)],
)
def edit_invitation(invitation_id: str, payload: schemas.InvitationEdit, db: Session = Depends(get_db)):
    invitation = _load_invitation(db, invitation_id)
    return invitations_crud.edit(db, invitation, name=payload.name, comment=payload.comment)

# =================================================================================
# 🗑️ DELETE /api/invitations/{id}: borra invitación e invitados
# ---------------------------------------------------------------------------------
@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_user)],
)
def delete_invitation(invitation_id: str, db: Session = Depends(get_db)) -> Response:
    invitation = _load_invitation(db, invitation_id)
    invitations_crud.delete(db, invitation.invitation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# =================================================================================
# 👥 GET /api/invitations/{id}/guests: invitados de una invitación
# ---------------------------------------------------------------------------------
@router.get(
    "/{invitation_id}/guests",
    response_model=List[schemas.GuestResponse],
    dependencies=[Depends(require_user)],
)
def list_invitation_guests(invitation_id: str, db: Session = Depends(get_db)):
    invitation = _load_invitation(db, invitation_id)
    guests = guests_crud.list_by_invitation(db, invitation.invitation_id)
    if not guests:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No guests found")
    return guests

# =================================================================================
# ➕ POST /api/invitations/{id}/guests: añade un invitado
# ---------------------------------------------------------------------------------
@router.post(
    "/{invitation_id}/guests",
    response_model=schemas.GuestCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_user)],
)
def add_guest(invitation_id: str, payload: schemas.GuestCreate, db: Session = Depends(get_db)):
    invitation = _load_invitation(db, invitation_id)
    guest = guests_crud.create(
        db,
        invitation_id=invitation.invitation_id,
        full_name=payload.full_name,
        estimated_partecipation=payload.estimated_partecipation,
        menu_type=payload.menu_type,
        menu_kids=payload.menu_kids,
        needs=payload.needs,
        status=payload.status,
        nights_needed=payload.nights_needed,
    )
    return schemas.GuestCreated(guest_id=guest.guest_id)
