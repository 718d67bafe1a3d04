# tests/test_guests_api.py
# Rutas /api/guests (todas requieren sesión de operador).

import pytest

from weddings.crud import guests_crud, invitations_crud
from weddings.models import GuestStatusEnum, InvitationStatusEnum


@pytest.mark.parametrize(
    "method, path",
    [("get", "/api/guests"), ("get", "/api/guests/1"), ("patch", "/api/guests/1"), ("delete", "/api/guests/1")],
)
def test_guest_routes_require_session(client, method, path):
    assert client.request(method.upper(), path, json={}).status_code == 401


def test_list_guests_empty_is_404(auth_client):
    r = auth_client.get("/api/guests")
    assert r.status_code == 404
    assert r.json()["error"] == "No guests found"


def test_list_and_get_guest(auth_client, invitation_with_guests):
    invitation, guests = invitation_with_guests
    listed = auth_client.get("/api/guests").json()
    assert len(listed) == 3

    r = auth_client.get(f"/api/guests/{guests[1].guest_id}")
    assert r.status_code == 200
    body = r.json()
    assert body["fullName"] == "Anna Rossi"
    assert body["invitationId"] == invitation.invitation_id
    assert body["status"] == "Pending"


def test_get_unknown_guest_is_404(auth_client):
    r = auth_client.get("/api/guests/4040")
    assert r.status_code == 404
    assert r.json() == {"error": "Guest not found", "code": "NOT_FOUND"}


def test_patch_guest_is_partial_and_resyncs_status(auth_client, db, invitation_with_guests):
    invitation, guests = invitation_with_guests
    for guest in guests:
        r = auth_client.patch(f"/api/guests/{guest.guest_id}", json={"status": "Declined"})
        assert r.status_code == 200
        assert r.json()["status"] == "Declined"
        assert r.json()["fullName"] == guest.full_name

    db.expire_all()
    assert invitations_crud.get_by_id(db, invitation.invitation_id).status == InvitationStatusEnum.declined


def test_patch_guest_rejects_blank_name(auth_client, invitation_with_guests):
    _, guests = invitation_with_guests
    r = auth_client.patch(f"/api/guests/{guests[0].guest_id}", json={"fullName": "  "})
    assert r.status_code == 400


def test_patch_unknown_guest_is_404(auth_client):
    assert auth_client.patch("/api/guests/4040", json={"status": "Accepted"}).status_code == 404


def test_delete_guest(auth_client, db, invitation_with_guests):
    invitation, guests = invitation_with_guests
    guests_crud.update(db, guests[0], status=GuestStatusEnum.accepted)
    doomed = [g.guest_id for g in guests[1:]]

    for guest_id in doomed:
        assert auth_client.delete(f"/api/guests/{guest_id}").status_code == 204

    db.expire_all()
    assert invitations_crud.get_by_id(db, invitation.invitation_id).status == InvitationStatusEnum.accepted
    assert auth_client.delete(f"/api/guests/{doomed[0]}").status_code == 404
