import os
import sys


# Point the application at an in-memory database and keep log files out of
# the working tree. These must be set before ``leave_portal`` is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ["TIMEZONE"] = "UTC"
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest  # noqa: E402

from leave_portal.core.events import event_bus  # noqa: E402
from leave_portal.core.security import PasswordHasher  # noqa: E402
from leave_portal.db.base import Base  # noqa: E402
from leave_portal.db.session import SessionLocal, engine  # noqa: E402
from leave_portal.services.user import UserService  # noqa: E402

PASSWORDS = {
    "admin@example.com": "admin-pass",
    "alice@example.com": "alice-pass",
    "bob@example.com": "bob-pass",
}


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    event_bus.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def users(db, hasher):
    """Admin plus two employees, keyed by short name."""
    service = UserService(db, password_hasher=hasher)
    return {
        "admin": service.create_user("Admin User", "admin@example.com", PASSWORDS["admin@example.com"], is_admin=True).unwrap(),
        "alice": service.create_user("Alice Smith", "alice@example.com", PASSWORDS["alice@example.com"]).unwrap(),
        "bob": service.create_user("Bob Jones", "bob@example.com", PASSWORDS["bob@example.com"]).unwrap(),
    }


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from leave_portal.main import app

    return TestClient(app)


@pytest.fixture
def auth_headers(client, users):
    """Sign a user in through the API and return its Authorization header."""
    def _headers(email):
        response = client.post(
            "/api/v1/auth/signin",
            json={"email": email, "password": PASSWORDS[email]},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers
