# weddings/models.py

# =================================================================================
# 🏛️ DEFINICIÓN DE LOS MODELOS DE LA BASE DE DATOS (ORM)
# ---------------------------------------------------------------------------------
# Estructura de las tablas `users`, `invitations` y `guests` con SQLAlchemy ORM.
# - Enums para consistencia (menú, necesidades, estados RSVP, noches).
# - Los enums se persisten por su VALOR ("Gluten-Free", "Partially Accepted"...).
# - guest_id es autoincremental (generado por la BD, sin "max + 1").
# - invitation_id es un número aleatorio de 6 dígitos protegido por la PK.
# =================================================================================

import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    Enum as SQLAlchemyEnum,
)
from sqlalchemy.orm import relationship

from weddings.db import Base

INVITATION_ID_MIN = 100000
INVITATION_ID_MAX = 999999


# 🗂️ ENUMS PARA CONSISTENCIA DE DATOS
# ---------------------------------------------------------------------------------
class MenuTypeEnum(str, enum.Enum):
    standard = "Standard"
    vegetarian = "Vegetarian"
    vegan = "Vegan"
    gluten_free = "Gluten-Free"
    lactose_free = "Lactose-Free"


class NeedsEnum(str, enum.Enum):  # Transporte / alojamiento que necesita el invitado.
    autonomous = "Autonomous"
    bus_only = "Bus-Only"
    bus_and_hotel = "Bus-And-Hotel"
    hotel_only = "Hotel-Only"


class GuestStatusEnum(str, enum.Enum):  # RSVP individual.
    pending = "Pending"
    accepted = "Accepted"
    declined = "Declined"


class InvitationStatusEnum(str, enum.Enum):  # RSVP agregado (derivado de los invitados).
    pending = "Pending"
    partially_accepted = "Partially Accepted"
    accepted = "Accepted"
    declined = "Declined"


class NightsNeededEnum(str, enum.Enum):  # Noches de hotel (21 y/o 22).
    both = "Both"
    only_21 = "21-Only"
    only_22 = "22-Only"
    none = "None"


def _enum_column(enum_cls, name: str) -> SQLAlchemyEnum:
    """Enum de SQLAlchemy que guarda `value` en lugar del nombre del miembro."""
    return SQLAlchemyEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


# 🔐 MODELO DE OPERADORES (TABLA 'users')
# ---------------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hash = Column(String(255), nullable=False)  # bcrypt (incluye la sal).


# 💌 MODELO DE INVITACIONES (TABLA 'invitations')
# ---------------------------------------------------------------------------------
class Invitation(Base):
    __tablename__ = "invitations"
    __table_args__ = (
        CheckConstraint(
            f"invitation_id BETWEEN {INVITATION_ID_MIN} AND {INVITATION_ID_MAX}",
            name="ck_invitations_six_digits",
        ),
    )

    invitation_id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    status = Column(
        _enum_column(InvitationStatusEnum, "invitation_status"),
        nullable=False,
        default=InvitationStatusEnum.pending,
    )
    comment = Column(Text, nullable=False, default="")

    # La BD pone invitation_id a NULL al borrar; el borrado explícito de invitados
    # lo hace invitations_crud.delete dentro de la misma transacción.
    guests = relationship(
        "Guest",
        back_populates="invitation",
        passive_deletes=True,
        lazy="selectin",
    )


# 🤵👰 MODELO DE INVITADOS (TABLA 'guests')
# ---------------------------------------------------------------------------------
class Guest(Base):
    __tablename__ = "guests"

    guest_id = Column(Integer, primary_key=True, autoincrement=True)
    invitation_id = Column(
        Integer,
        ForeignKey("invitations.invitation_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    full_name = Column(String(100), nullable=False)

    # --- Preferencias de menú ---
    menu_type = Column(_enum_column(MenuTypeEnum, "menu_type"), nullable=False, default=MenuTypeEnum.standard)
    menu_kids = Column(Boolean, nullable=False, default=False)

    # --- Logística ---
    needs = Column(_enum_column(NeedsEnum, "guest_needs"), nullable=False, default=NeedsEnum.autonomous)
    nights_needed = Column(
        _enum_column(NightsNeededEnum, "nights_needed"),
        nullable=False,
        default=NightsNeededEnum.none,
    )

    # --- RSVP ---
    status = Column(_enum_column(GuestStatusEnum, "guest_status"), nullable=False, default=GuestStatusEnum.pending)
    estimated_partecipation = Column(Boolean, nullable=False, default=True)

    invitation = relationship("Invitation", back_populates="guests")
