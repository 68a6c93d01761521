from nestmart.store_service.models import User
from nestmart.store_service.roles import Role

from .conftest import PASSWORD, auth_header_for, ensure_user


def register(client, email="john@example.com", role="User", password=PASSWORD, name="John"):
    return client.post("/users", json={"name": name, "email": email, "password": password, "role": role})


def test_register_returns_user_without_password(client):
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert "password" not in body
    assert body["id"] > 0
    assert body["name"] == "John"
    assert body["email"] == "john@example.com"
    assert body["role"] == "User"


def test_register_stores_hash_not_plaintext(client, app):
    register(client)
    db = app.state.session_factory()
    try:
        user = db.query(User).filter(User.email == "john@example.com").first()
        assert user.password != PASSWORD
        assert app.state.password_hasher.verify(PASSWORD, user.password)
    finally:
        db.close()


def test_register_normalizes_email(client):
    response = register(client, email="John@Example.com")
    assert response.status_code == 201
    assert response.json()["email"] == "john@example.com"


def test_register_duplicate_email(client):
    assert register(client).status_code == 201
    again = register(client, email="JOHN@example.com")
    assert again.status_code == 400
    assert again.json() == {"detail": "Email already registered"}


def test_register_unknown_role(client):
    response = register(client, role="Superuser")
    assert response.status_code == 422


def test_register_missing_fields(client):
    response = client.post("/users", json={"email": "john@example.com", "password": PASSWORD})
    assert response.status_code == 422


def test_register_invalid_email(client):
    assert register(client, email="not-an-email").status_code == 422


def test_register_short_name(client):
    assert register(client, name="J").status_code == 422


def test_password_minimum_length_is_configurable(tmp_path):
    from fastapi.testclient import TestClient
    from nestmart.store_service.config import load_settings
    from nestmart.store_service.main import create_app
    from .conftest import TEST_SECRET

    settings = load_settings(
        JWT_SECRET_KEY=TEST_SECRET,
        DATABASE_URL=f"sqlite:///{tmp_path / 'policy.db'}",
        PASSWORD_MIN_LENGTH=6,
        PASSWORD_HASH_ROUNDS=1000,
    )
    with TestClient(create_app(settings)) as c:
        short = register(c, password="abcde")
        assert short.status_code == 422
        assert short.json() == {"detail": "Password must be at least 6 characters long"}
        assert register(c, password="abcdef").status_code == 201


def test_minimum_length_of_three_accepts_three_characters(client):
    assert register(client, password="ab").status_code == 422
    assert register(client, password="abc").status_code == 201


def test_register_password_over_maximum_length(client):
    response = register(client, password="x" * 5000)
    assert response.status_code == 422
    assert response.json() == {"detail": "Password must be at most 1024 bytes long"}


def test_register_maximum_length_counts_utf8_bytes(client):
    assert register(client, password="é" * 513).status_code == 422
    assert register(client, password="é" * 512).status_code == 201


def test_register_password_with_lone_surrogate(client):
    # Raw JSON so the client does not have to encode the surrogate itself
    body = '{"name": "John", "email": "john@example.com", "password": "ab\\ud800cd", "role": "User"}'
    response = client.post("/users", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 422
    assert response.json() == {"detail": "Password contains characters that cannot be encoded"}


def test_list_users_requires_admin_or_manager(client, app):
    plain = ensure_user(app, email="plain@example.com", role=Role.USER)
    manager = ensure_user(app, email="manager@example.com", role=Role.MANAGER)

    assert client.get("/users").status_code == 401
    assert client.get("/users", headers=auth_header_for(app, plain)).status_code == 403

    response = client.get("/users", headers=auth_header_for(app, manager))
    assert response.status_code == 200
    emails = [u["email"] for u in response.json()]
    assert emails == ["plain@example.com", "manager@example.com"]
    assert all("password" not in u for u in response.json())


def test_get_user(client, app):
    admin = ensure_user(app, email="admin@example.com", role=Role.ADMIN)
    h = auth_header_for(app, admin)

    found = client.get(f"/users/{admin['id']}", headers=h)
    assert found.status_code == 200
    assert found.json()["role"] == "Admin"

    missing = client.get("/users/9999", headers=h)
    assert missing.status_code == 404


def test_delete_user_admin_only(client, app):
    admin = ensure_user(app, email="admin@example.com", role=Role.ADMIN)
    manager = ensure_user(app, email="manager@example.com", role=Role.MANAGER)
    victim = ensure_user(app, email="victim@example.com", role=Role.USER)

    denied = client.delete(f"/users/{victim['id']}", headers=auth_header_for(app, manager))
    assert denied.status_code == 403

    h = auth_header_for(app, admin)
    deleted = client.delete(f"/users/{victim['id']}", headers=h)
    assert deleted.status_code == 204
    assert client.get(f"/users/{victim['id']}", headers=h).status_code == 404
    assert client.delete(f"/users/{victim['id']}", headers=h).status_code == 404


def test_deleted_user_can_no_longer_log_in(client, app):
    admin = ensure_user(app, email="admin@example.com", role=Role.ADMIN)
    victim = ensure_user(app, email="victim@example.com", role=Role.USER)
    client.delete(f"/users/{victim['id']}", headers=auth_header_for(app, admin))

    login = client.post("/auth/login", json={"email": "victim@example.com", "password": PASSWORD})
    assert login.status_code == 401
