import pytest
from fastapi.testclient import TestClient

from nestmart.store_service.config import load_settings
from nestmart.store_service.main import create_app
from nestmart.store_service.models import User
from nestmart.store_service.roles import Role

TEST_SECRET = "test-secret-key-for-the-store-service-0123456789"
PASSWORD = "min length 3 character"


@pytest.fixture
def settings(tmp_path):
    return load_settings(
        JWT_SECRET_KEY=TEST_SECRET,
        PASSWORD_MIN_LENGTH=3,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        PASSWORD_HASH_ROUNDS=1000,
        LOG_LEVEL="INFO",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def ensure_user(app, email="owner@example.com", password=PASSWORD, role=Role.USER, name="Owner"):
    db = app.state.session_factory()
    try:
        u = db.query(User).filter(User.email == email).first()
        if not u:
            u = User(name=name, email=email, password=app.state.password_hasher.hash(password), role=role)
            db.add(u)
            db.commit()
            db.refresh(u)
        return {"id": u.id, "email": u.email, "role": u.role}
    finally:
        db.close()


def auth_header_for(app, user):
    token = app.state.token_service.issue({
        "sub": str(user["id"]),
        "username": user["email"],
        "role": user["role"].value,
    })
    return {"Authorization": f"Bearer {token}"}
