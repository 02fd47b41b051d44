from datetime import timedelta

from fastapi.testclient import TestClient

from wellness import crud
from wellness.core import security
from wellness.core.config import Settings, settings
from wellness.main import create_application
from wellness.models.user import Role

LOGIN = "/api/auth/login"
REGISTER = "/api/auth/register"
ME = "/api/auth/me"


def test_login_existing_admin(client, admin_user):
    response = client.post(LOGIN, json={"email": " Admin@Example.com ", "password": "admin-pass"})

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"] == {"id": admin_user.id, "name": "Admin", "role": "admin", "email": "admin@example.com"}


def test_login_wrong_password(client, admin_user):
    response = client.post(LOGIN, json={"email": "admin@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_requires_email_and_password(client):
    response = client.post(LOGIN, json={"email": "someone@example.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_login_rejects_non_json(client):
    response = client.post(LOGIN, data={"email": "a@example.com", "password": "x"})

    assert response.status_code == 415
    assert response.json() == {"error": "Content-Type must be application/json"}


def test_first_login_creates_client_account(client):
    response = client.post(
        LOGIN,
        json={"email": "new.client@example.com", "password": "pw", "mode": "client", "company_id": 2},
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert (user["role"], user["name"]) == ("client", "new.client")


def test_first_login_creates_allowlisted_nutritionist(client):
    response = client.post(LOGIN, json={"email": "second.nutri@example.com", "password": "pw", "name": "Sam Rao"})

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "nutritionist"
    assert response.json()["user"]["name"] == "Sam Rao"


def test_unknown_staff_email_is_refused(client):
    response = client.post(LOGIN, json={"email": "stranger@example.com", "password": "pw"})

    assert response.status_code == 403
    assert response.json() == {"error": "This email is not authorized to access the dashboard."}


def test_nutritionist_removed_from_allowlist_cannot_log_in(client, db):
    crud.user.create(db, name="Former", email="former@example.com", password="pw", role=Role.NUTRITIONIST)
    db.commit()

    response = client.post(LOGIN, json={"email": "former@example.com", "password": "pw"})

    assert response.status_code == 403
    assert response.json() == {"error": "This email is not authorized for staff access."}


def test_register_allowlisted_nutritionist(client):
    response = client.post(
        REGISTER,
        json={"name": "Sam Rao", "email": "Second.Nutri@example.com", "password": "pw", "role": "nutritionist"},
    )

    assert response.status_code == 201
    assert response.json()["user"]["email"] == "second.nutri@example.com"


def test_register_nutritionist_outside_allowlist(client):
    response = client.post(
        REGISTER, json={"name": "Eve", "email": "eve@example.com", "password": "pw", "role": "nutritionist"}
    )

    assert response.status_code == 403


def test_register_rejects_client_role(client):
    response = client.post(
        REGISTER, json={"name": "Eve", "email": "eve@example.com", "password": "pw", "role": "client"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "role must be admin | nutritionist"


def test_public_admin_registration_is_switchable(client, monkeypatch):
    body = {"name": "Boss", "email": "boss@example.com", "password": "pw", "role": "admin"}

    assert client.post(REGISTER, json=body).status_code == 403

    monkeypatch.setattr(settings, "ALLOW_PUBLIC_ADMIN_REGISTRATION", True)
    response = client.post(REGISTER, json=body)

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "admin"


def test_register_duplicate_email(client, nutritionist_user):
    response = client.post(
        REGISTER,
        json={"name": "Dup", "email": "NUTRI@example.com", "password": "pw", "role": "nutritionist"},
    )

    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered"}


def test_me_returns_principal(client, nutritionist_user, nutritionist_headers):
    response = client.get(ME, headers=nutritionist_headers)

    assert response.status_code == 200
    assert response.json() == {
        "id": nutritionist_user.id,
        "role": "nutritionist",
        "name": "Priya Nair",
        "email": "nutri@example.com",
    }


def test_token_without_bearer_prefix_is_accepted(client, admin_headers):
    raw = admin_headers["Authorization"].split(" ", 1)[1]

    assert client.get(ME, headers={"Authorization": raw}).status_code == 200


def test_missing_token(client):
    response = client.get(ME)

    assert response.status_code == 401
    assert response.json() == {"error": "No token"}


def test_garbage_token(client):
    response = client.get(ME, headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_expired_token(client, admin_user):
    token = security.create_access_token(
        admin_user.id,
        role="admin",
        name="Admin",
        email="admin@example.com",
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(minutes=-5),
    )

    response = client.get(ME, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_token_signed_with_other_key(client, admin_user):
    token = security.create_access_token(
        admin_user.id, role="admin", name="Admin", email="admin@example.com", secret_key="another-key"
    )

    assert client.get(ME, headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_wrong_role_is_forbidden(client, client_headers):
    response = client.get("/api/summary", headers=client_headers)

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


def test_missing_secret_key_is_a_server_error():
    misconfigured = create_application(Settings(SECRET_KEY=None))
    test_client = TestClient(misconfigured)

    response = test_client.get(ME, headers={"Authorization": "Bearer anything"})

    assert response.status_code == 500
    assert response.json() == {"error": "Server misconfigured"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
