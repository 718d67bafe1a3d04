# weddings/routers/guests.py
# =============================================================================
# 👥 Rutas de invitados (todas requieren sesión de operador)
# - GET /api/guests, GET/PATCH/DELETE /api/guests/{guest_id}
# - Editar o borrar un invitado recalcula el estado de su invitación (CRUD).
# =============================================================================

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from weddings import schemas
from weddings.core.security import require_user
from weddings.crud import guests_crud
from weddings.db import get_db

router = APIRouter(
    prefix="/api/guests",
    tags=["guests"],
    dependencies=[Depends(require_user)],
)


@router.get("", response_model=List[schemas.GuestResponse])
def list_guests(db: Session = Depends(get_db)):
    guests = guests_crud.list_all(db)
    if not guests:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No guests found")
    return guests


@router.get("/{guest_id}", response_model=schemas.GuestResponse)
def get_guest(guest_id: int, db: Session = Depends(get_db)):
    guest = guests_crud.get_by_id(db, guest_id)
    if guest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    return guest


@router.patch("/{guest_id}", response_model=schemas.GuestResponse)
def edit_guest(guest_id: int, payload: schemas.GuestPatch, db: Session = Depends(get_db)):
    """Edición parcial: solo se tocan los campos enviados."""
    guest = guests_crud.get_by_id(db, guest_id)
    if guest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    return guests_crud.update(db, guest, **payload.changes())


@router.delete("/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_guest(guest_id: int, db: Session = Depends(get_db)) -> Response:
    if guests_crud.delete(db, guest_id) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
