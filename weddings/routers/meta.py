# weddings/routers/meta.py  # Router de metadatos para el frontend.

from typing import Dict, List

from fastapi import APIRouter

from weddings.models import (
    GuestStatusEnum,
    InvitationStatusEnum,
    MenuTypeEnum,
    NeedsEnum,
    NightsNeededEnum,
)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@router.get("/meta/options")
def get_meta_options() -> Dict[str, List[str]]:
    """
    Devuelve los valores válidos de cada enum para que el frontend pinte los
    selectores sin duplicar listas (mismos textos que se guardan en la BD).
    """
    return {
        "menuTypes": [m.value for m in MenuTypeEnum],
        "needs": [n.value for n in NeedsEnum],
        "guestStatuses": [s.value for s in GuestStatusEnum],
        "nightsNeeded": [n.value for n in NightsNeededEnum],
        "invitationStatuses": [s.value for s in InvitationStatusEnum],
    }
