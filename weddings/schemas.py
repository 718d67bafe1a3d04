# weddings/schemas.py                                                                          # Ruta del archivo de esquemas (Pydantic).

# =================================================================================
# 📦 Schemas (MODELOS DE DATOS Pydantic)
# ---------------------------------------------------------------------------------
# Este archivo define los modelos de datos usados por la API, basados en Pydantic.
# - Validan la entrada (tipos, enums, nombres no vacíos) ANTES de llegar al CRUD.
# - Serializan objetos ORM a JSON (from_attributes=True).
# - El JSON usa camelCase (invitationId, fullName, menuType...), como el frontend
#   existente; en la entrada también se acepta snake_case (populate_by_name).
# =================================================================================

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from weddings.models import (
    GuestStatusEnum,
    InvitationStatusEnum,
    MenuTypeEnum,
    NeedsEnum,
    NightsNeededEnum,
)


class CamelModel(BaseModel):                                                                     # Base común: alias camelCase + lectura desde ORM.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _strip_required(v: str, field: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError(f"{field} no puede estar vacío.")
    return v

# =================================================================================
# 👤 Invitados
# =================================================================================
class GuestFields(CamelModel):                                                                   # Campos de un invitado (compartidos entre requests/responses).
    full_name: str = Field(..., max_length=100)
    menu_type: MenuTypeEnum = MenuTypeEnum.standard
    menu_kids: bool = False
    needs: NeedsEnum = NeedsEnum.autonomous
    status: GuestStatusEnum = GuestStatusEnum.pending
    nights_needed: NightsNeededEnum = NightsNeededEnum.none
    estimated_partecipation: bool = True


class GuestCreate(GuestFields):                                                                  # Alta de invitado: fullName y estimatedPartecipation obligatorios.
    estimated_partecipation: bool

    @field_validator("full_name")
    @classmethod
    def _non_empty_name(cls, v: str) -> str:
        return _strip_required(v, "fullName")


class GuestPatch(CamelModel):                                                                    # Edición parcial: lo que no venga no se toca.
    full_name: Optional[str] = Field(default=None, max_length=100)
    menu_type: Optional[MenuTypeEnum] = None
    menu_kids: Optional[bool] = None
    needs: Optional[NeedsEnum] = None
    status: Optional[GuestStatusEnum] = None
    nights_needed: Optional[NightsNeededEnum] = None
    estimated_partecipation: Optional[bool] = None

    @field_validator("full_name")
    @classmethod
    def _non_empty_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _strip_required(v, "fullName")

    def changes(self) -> dict:
        """Solo los campos enviados explícitamente y no nulos (nombres snake_case)."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class GuestBulkItem(GuestPatch):                                                                 # Un registro del lote RSVP: guestId + campos parciales.
    guest_id: int

    def as_update(self) -> dict:
        return {"guest_id": self.guest_id, **self.changes()}


class GuestResponse(GuestFields):                                                                # Invitado tal como lo devuelve la API.
    guest_id: int
    invitation_id: Optional[int] = None


class GuestCreated(CamelModel):
    guest_id: int

# =================================================================================
# 💌 Invitaciones
# =================================================================================
class InvitationCreate(CamelModel):                                                              # Alta: el estado no se acepta, nace en Pending.
    name: str = Field(..., max_length=100)
    comment: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _non_empty_name(cls, v: str) -> str:
        return _strip_required(v, "name")


class InvitationEdit(CamelModel):                                                                # Edición de datos propios de la invitación (admin).
    name: Optional[str] = Field(default=None, max_length=100)
    comment: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _non_empty_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _strip_required(v, "name")


class InvitationRSVPUpdate(CamelModel):                                                          # Respuesta RSVP enviada por el invitado.
    comment: str = ""
    guests: List[GuestBulkItem]


class InvitationCreated(CamelModel):
    invitation_id: int


class InvitationResponse(CamelModel):
    invitation_id: int
    name: str
    status: InvitationStatusEnum
    comment: str = ""
    guests: List[GuestResponse] = Field(default_factory=list)

# =================================================================================
# 🔐 Sesiones
# =================================================================================
class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def _clean_username(cls, v: str) -> str:
        return _strip_required(v, "username")


class UserResponse(CamelModel):
    user_id: int
    username: str
