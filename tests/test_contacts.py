from fastapi import status
from sqlalchemy import select

from app import crud
from app.errors import NotFound
from app.models import Address

import pytest


def create_contact(client, token, **fields):
    payload = {"first_name": "John", **fields}
    resp = client.post("/contacts", json=payload, headers={"Authorization": token})
    assert resp.status_code == status.HTTP_201_CREATED
    return resp.json()


def test_create_and_list_contacts(client, token):
    headers = {"Authorization": token}
    created = create_contact(
        client,
        token,
        last_name="Doe",
        email="john@example.com",
        phone="12345",
    )
    assert created["name"] == "John Doe"
    assert created["addresses"] == []
    assert "first_name" not in created

    list_resp = client.get("/contacts", headers=headers)
    assert list_resp.status_code == status.HTTP_200_OK
    assert [c["id"] for c in list_resp.json()] == [created["id"]]


def test_get_returns_what_was_sent(client, token):
    created = create_contact(
        client,
        token,
        first_name="Jane",
        last_name="Smith",
        email="jane@example.com",
        phone="555",
    )
    resp = client.get(f"/contacts/{created['id']}", headers={"Authorization": token})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {
        "id": created["id"],
        "name": "Jane Smith",
        "email": "jane@example.com",
        "phone": "555",
        "addresses": [],
    }


def test_create_requires_first_name(client, token):
    resp = client.post(
        "/contacts", json={"last_name": "Doe"}, headers={"Authorization": token}
    )
    assert resp.status_code == 422
    assert resp.json()["errors"]["message"] == ["first_name: Field required"]


def test_create_rejects_bad_email(client, token):
    resp = client.post(
        "/contacts",
        json={"first_name": "John", "email": "not-an-email"},
        headers={"Authorization": token},
    )
    assert resp.status_code == 422


def test_partial_update_keeps_other_fields(client, token):
    headers = {"Authorization": token}
    created = create_contact(client, token, last_name="Doe", phone="111")
    for _ in range(2):
        resp = client.put(
            f"/contacts/{created['id']}", json={"phone": "222"}, headers=headers
        )
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json() == {
            "id": created["id"],
            "name": "John Doe",
            "email": None,
            "phone": "222",
            "addresses": [],
        }


def test_update_can_clear_last_name_but_not_first_name(client, token):
    headers = {"Authorization": token}
    created = create_contact(client, token, last_name="Doe")
    resp = client.put(
        f"/contacts/{created['id']}", json={"last_name": None}, headers=headers
    )
    assert resp.json()["name"] == "John"

    resp = client.put(
        f"/contacts/{created['id']}", json={"first_name": None}, headers=headers
    )
    assert resp.status_code == 422


def test_missing_contact_is_not_found(client, token):
    headers = {"Authorization": token}
    assert client.get("/contacts/999", headers=headers).status_code == 404
    assert client.put("/contacts/999", json={}, headers=headers).status_code == 404
    resp = client.delete("/contacts/999", headers=headers)
    assert resp.status_code == 404
    assert resp.json() == {"errors": {"message": ["Contact not found"]}}


def test_contacts_are_private_to_owner(client, token, other_token):
    created = create_contact(client, token, first_name="Secret")
    path = f"/contacts/{created['id']}"
    intruder = {"Authorization": other_token}

    assert client.get("/contacts", headers=intruder).json() == []
    get_resp = client.get(path, headers=intruder)
    assert get_resp.status_code == status.HTTP_404_NOT_FOUND
    # same body as a contact that never existed
    assert get_resp.json() == client.get("/contacts/999", headers=intruder).json()
    assert client.put(path, json={"phone": "1"}, headers=intruder).status_code == 404
    assert client.delete(path, headers=intruder).status_code == 404

    owner_view = client.get(path, headers={"Authorization": token})
    assert owner_view.status_code == status.HTTP_200_OK
    assert owner_view.json()["phone"] is None


def test_delete_contact_removes_addresses(client, db_session, token):
    headers = {"Authorization": token}
    created = create_contact(client, token)
    for country in ("Indonesia", "Japan"):
        resp = client.post(
            f"/contacts/{created['id']}/addresses",
            json={"country": country},
            headers=headers,
        )
        assert resp.status_code == status.HTTP_201_CREATED

    resp = client.delete(f"/contacts/{created['id']}", headers=headers)
    assert resp.status_code == status.HTTP_204_NO_CONTENT
    assert resp.content == b""

    assert client.get(f"/contacts/{created['id']}", headers=headers).status_code == 404
    remaining = db_session.scalars(
        select(Address).where(Address.contact_id == created["id"])
    ).all()
    assert remaining == []


def test_resolve_contact_hides_foreign_contacts(client, db_session, token, other_token):
    created = create_contact(client, token)
    owner = crud.get_user_by_token(db_session, token)
    intruder = crud.get_user_by_token(db_session, other_token)

    assert crud.resolve_contact(db_session, owner, created["id"]).id == created["id"]
    with pytest.raises(NotFound):
        crud.resolve_contact(db_session, intruder, created["id"])


def test_full_scenario(client):
    client.post(
        "/users", json={"username": "alice", "password": "pw1", "name": "Alice"}
    )
    login_resp = client.post(
        "/users/login", json={"username": "alice", "password": "pw1"}
    )
    headers = {"Authorization": login_resp.json()["token"]}

    contact = client.post("/contacts", json={"first_name": "Bob"}, headers=headers)
    contact_id = contact.json()["id"]
    address = client.post(
        f"/contacts/{contact_id}/addresses",
        json={"country": "Indonesia"},
        headers=headers,
    )
    assert address.status_code == status.HTTP_201_CREATED

    resp = client.get(f"/contacts/{contact_id}", headers=headers)
    assert resp.json() == {
        "id": contact_id,
        "name": "Bob",
        "email": None,
        "phone": None,
        "addresses": [
            {
                "id": address.json()["id"],
                "street": None,
                "city": None,
                "province": None,
                "country": "Indonesia",
                "postal_code": None,
            }
        ],
    }


def test_out_of_range_contact_id_is_not_found(client, token):
    headers = {"Authorization": token}
    path = "/contacts/99999999999999999999"
    assert client.get(path, headers=headers).status_code == 404
    assert client.put(path, json={"phone": "1"}, headers=headers).status_code == 404
    resp = client.delete(path, headers=headers)
    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json() == {"errors": {"message": ["Contact not found"]}}
