from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi.testclient import TestClient

    from travel_backend.database import UnitOfWork

USERS = "/api/v1/users"


def _payload(**overrides: object) -> dict[str, object]:
    return {
        "first_name": "Khadijah",
        "full_name": "Khadijah Binti Khuwailid",
        "gender": "female",
        "email": "khadijah@example.com",
        "phone": "+6281200001",
        "password": "Password123",
        "role": "customer",
        **overrides,
    }


def test_register_user(client: TestClient, uow: UnitOfWork) -> None:
    response = client.post(USERS, json=_payload(email="KHADIJAH@example.com"))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "khadijah@example.com"
    assert data["is_active"] is True
    assert data["is_verified"] is False
    assert "password" not in data
    assert "password_hash" not in data
    assert uow.users.find_by_id(data["id"]).password_hash.count(":") == 1


def test_duplicate_email_and_phone(client: TestClient) -> None:
    assert client.post(USERS, json=_payload()).status_code == 201

    email = client.post(USERS, json=_payload(phone="+6281299999"))
    phone = client.post(USERS, json=_payload(email="other@example.com"))

    assert email.status_code == 409
    assert email.json()["error"]["code"] == "ERR_EMAIL_EXISTS"
    assert email.json()["error"]["details"] == {"email": "khadijah@example.com"}
    assert phone.status_code == 409
    assert phone.json()["error"]["code"] == "ERR_PHONE_EXISTS"


def test_invalid_user_payload(client: TestClient) -> None:
    response = client.post(
        USERS,
        json=_payload(email="not-an-email", gender="other", password="short"),
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {
        "email": "INVALID_FORMAT",
        "gender": "INVALID_CHOICE",
        "password": "LENGTH_TOO_SHORT",
    }


def test_list_users_filters(client: TestClient) -> None:
    client.post(USERS, json=_payload())
    client.post(
        USERS,
        json=_payload(
            first_name="Bilal",
            full_name="Bilal bin Rabah",
            email="bilal@example.com",
            phone="+6281200002",
            gender="male",
            role="muthawif",
        ),
    )

    guides = client.get(USERS, params={"role": "muthawif"}).json()
    searched = client.get(USERS, params={"search": "khadijah"}).json()
    everyone = client.get(USERS, params={"order_by": "full_name", "order_type": "asc"})

    assert [user["full_name"] for user in guides["data"]] == ["Bilal bin Rabah"]
    assert guides["pagination"]["total_items"] == 1
    assert [user["email"] for user in searched["data"]] == ["khadijah@example.com"]
    assert [user["first_name"] for user in everyone.json()["data"]] == [
        "Bilal",
        "Khadijah",
    ]


def test_update_and_delete_user(client: TestClient) -> None:
    created = client.post(USERS, json=_payload()).json()["data"]
    url = f"{USERS}/{created['id']}"

    updated = client.patch(url, json={"last_name": "Khuwailid"})
    deleted = client.delete(url)
    missing = client.get(url)
    again = client.post(USERS, json=_payload())

    assert updated.status_code == 200
    assert updated.json()["data"]["last_name"] == "Khuwailid"
    assert updated.json()["data"]["first_name"] == "Khadijah"
    assert deleted.json()["data"] == "success delete data"
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "ERR_USER_NOT_FOUND"
    assert again.status_code == 201


def test_get_user_with_bad_id(client: TestClient) -> None:
    response = client.get(f"{USERS}/abc")

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"user_id": "INVALID_TYPE"}
