import os
import sys
import tempfile

import pytest

# Predictable test environment; must be set before app.core.config is imported
os.environ.setdefault("APP_ENV", "test")
_DB_FILE = os.path.join(tempfile.mkdtemp(prefix="pubadmin-"), "test.db")
os.environ.setdefault("DATABASE_URL_OVERRIDE", f"sqlite:///{_DB_FILE}")
os.environ.setdefault("BUSINESS_TIMEZONE", "America/Toronto")

# Ensure the project root (which contains the 'app' package) is on sys.path
THIS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.repositories.db import engine, SessionLocal, session_scope  # noqa: E402
from app.repositories.models import Base, OpeningHours, User, UserRole  # noqa: E402
from app.core.security import get_password_hash  # noqa: E402

# lifespan skips create_all when APP_ENV=test
Base.metadata.drop_all(bind=engine)
Base.metadata.create_all(bind=engine)


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def clean_hours():
    with session_scope() as s:
        s.query(OpeningHours).delete()
    yield


def ensure_user(email: str, password: str, role: UserRole = UserRole.admin, is_active: bool = True) -> None:
    with session_scope() as s:
        user = s.query(User).filter(User.email == email).first()
        if not user:
            s.add(
                User(
                    email=email,
                    first_name="Test",
                    hashed_password=get_password_hash(password),
                    is_active=is_active,
                    role=role,
                )
            )


def login_headers(client, email: str, password: str) -> dict:
    resp = client.post(
        "/auth/login",
        data={"username": email, "password": password},
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def staff_headers():
    from fastapi.testclient import TestClient
    from app.main import app

    ensure_user("staff@test.local", "pass123", UserRole.admin)
    return login_headers(TestClient(app), "staff@test.local", "pass123")
