# weddings/status.py
# =================================================================================
# 🧮 Estado agregado de una invitación
# ---------------------------------------------------------------------------------
# Función pura: a partir de los estados individuales de los invitados devuelve el
# estado de la invitación. Orden fijo de evaluación (gana la primera regla):
#   1) sin invitados            → Pending
#   2) todos Accepted           → Accepted
#   3) todos Declined           → Declined
#   4) cualquier otra mezcla    → Partially Accepted
# Ojo: todos en Pending también cae en la regla 4 (Partially Accepted).
# =================================================================================

from typing import Iterable, List

from weddings.models import GuestStatusEnum, InvitationStatusEnum


def derive_invitation_status(statuses: Iterable) -> InvitationStatusEnum:
    """Calcula el estado agregado. Acepta miembros del enum o sus valores en texto."""
    values: List[GuestStatusEnum] = [GuestStatusEnum(s) for s in statuses]

    if not values:
        return InvitationStatusEnum.pending
    if all(s == GuestStatusEnum.accepted for s in values):
        return InvitationStatusEnum.accepted
    if all(s == GuestStatusEnum.declined for s in values):
        return InvitationStatusEnum.declined
    return InvitationStatusEnum.partially_accepted
