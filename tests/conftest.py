"""Bootstrap de tests.

La app resuelve la URL de BD al importarse, así que se apunta a una SQLite
en fichero antes de importar nada de ``app``. El esquema se crea con
``create_all`` una vez por sesión y las tablas se vacían antes de cada test.
"""
import os
import pathlib

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[1]
_DB_FILE = _ROOT / "tmp" / "tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["PAYMENT_IS_PAID"] = "true"

from fastapi.testclient import TestClient  # noqa: E402

from app.core.config import reload_settings  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402

ADMIN_EMAIL = "admin@clinica.es"
ADMIN_PASSWORD = "admin-secret"
USER_EMAIL = "pro@clinica.es"
USER_PASSWORD = "pro-secret"


@pytest.fixture(scope="session", autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _make_user(db, email, password, role, nombre):
    user = User(email=email, password_hash=hash_password(password), nombre=nombre, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, ADMIN_EMAIL, ADMIN_PASSWORD, "admin", "Admin")


@pytest.fixture
def pro_user(db):
    return _make_user(db, USER_EMAIL, USER_PASSWORD, "professional", "Profesional")


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _login(client, email, password):
    res = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, admin_user):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def pro_headers(client, pro_user):
    return _login(client, USER_EMAIL, USER_PASSWORD)


@pytest.fixture
def unpaid(monkeypatch):
    monkeypatch.setenv("PAYMENT_IS_PAID", "false")
    reload_settings()
    yield
    monkeypatch.setenv("PAYMENT_IS_PAID", "true")
    reload_settings()
