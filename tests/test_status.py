# tests/test_status.py
# Estado agregado de la invitación a partir de los estados de sus invitados.

import pytest

from weddings.models import GuestStatusEnum as G, InvitationStatusEnum as I
from weddings.status import derive_invitation_status


@pytest.mark.parametrize(
    "statuses, expected",
    [
        ([], I.pending),
        ([G.accepted], I.accepted),
        ([G.accepted, G.accepted, G.accepted], I.accepted),
        ([G.declined, G.declined], I.declined),
        ([G.accepted, G.declined], I.partially_accepted),
        ([G.accepted, G.pending], I.partially_accepted),
        ([G.declined, G.pending], I.partially_accepted),
    ],
)
def test_derive_invitation_status(statuses, expected):
    assert derive_invitation_status(statuses) == expected


def test_all_pending_is_partially_accepted():
    # Ninguna regla anterior cubre "todos Pending": cae en la mezcla.
    assert derive_invitation_status([G.pending, G.pending]) == I.partially_accepted
    assert derive_invitation_status([G.pending]) == I.partially_accepted


def test_accepts_plain_string_values():
    assert derive_invitation_status(["Accepted", "Accepted"]) == I.accepted
    assert derive_invitation_status(iter(["Declined", "Accepted"])) == I.partially_accepted


def test_unknown_value_raises():
    with pytest.raises(ValueError):
        derive_invitation_status(["Maybe"])
