"""initial schema: users, invitations, guests

Revision ID: 5c1e0a7d2f41
Revises: 
Create Date: 2026-10-19 10:12:44.318207

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1e0a7d2f41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Mismos valores que los enums de weddings/models.py (se guardan por valor).
invitation_status = sa.Enum("Pending", "Partially Accepted", "Accepted", "Declined", name="invitation_status")
menu_type = sa.Enum("Standard", "Vegetarian", "Vegan", "Gluten-Free", "Lactose-Free", name="menu_type")
guest_needs = sa.Enum("Autonomous", "Bus-Only", "Bus-And-Hotel", "Hotel-Only", name="guest_needs")
nights_needed = sa.Enum("Both", "21-Only", "22-Only", "None", name="nights_needed")
guest_status = sa.Enum("Pending", "Accepted", "Declined", name="guest_status")


def upgrade() -> None:
    """Create users, invitations and guests."""
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("hash", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "invitations",
        sa.Column("invitation_id", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("status", invitation_status, nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.CheckConstraint("invitation_id BETWEEN 100000 AND 999999", name="ck_invitations_six_digits"),
    )

    op.create_table(
        "guests",
        sa.Column("guest_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "invitation_id",
            sa.Integer(),
            sa.ForeignKey("invitations.invitation_id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("menu_type", menu_type, nullable=False),
        sa.Column("menu_kids", sa.Boolean(), nullable=False),
        sa.Column("needs", guest_needs, nullable=False),
        sa.Column("nights_needed", nights_needed, nullable=False),
        sa.Column("status", guest_status, nullable=False),
        sa.Column("estimated_partecipation", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_guests_invitation_id", "guests", ["invitation_id"])


def downgrade() -> None:
    """Drop the three tables (and the PostgreSQL enum types)."""
    op.drop_index("ix_guests_invitation_id", table_name="guests")
    op.drop_table("guests")
    op.drop_table("invitations")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (guest_status, nights_needed, guest_needs, menu_type, invitation_status):
        enum_type.drop(bind, checkfirst=True)
