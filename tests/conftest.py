"""Pytest fixtures for Elevate Control tests.

Uses a SQLite test database and FastAPI TestClient. Overrides the
`get_db` dependency so tests are isolated from any real DB file.
"""

import os

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test_elevate.db")
# The app engine is built at import time; point it at the test database first.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import elevate.database as database
from elevate.auth import create_access_token, get_password_hash
from elevate.dependencies import SESSION_COOKIE_NAME
from elevate.main import app
from elevate.models import (
    Base,
    FaixaModel,
    ImpressoraModel,
    MarcaModel,
    ModeloModel,
    TipoModel,
    UserModel,
)

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop them after to ensure isolation."""
    Base.metadata.create_all(bind=engine)
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    """Provide a SQLAlchemy session for direct DB access in tests."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[database.get_db] = _override_get_db

# Many requests per test; keep the global rate limiter out of the way.
app.state.limiter.enabled = False


@pytest.fixture()
def client():
    """FastAPI test client without a session cookie."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session_token():
    return create_access_token({"sub": "admin"})


@pytest.fixture()
def auth_client(session_token):
    """Test client carrying a valid session cookie."""
    with TestClient(app, cookies={SESSION_COOKIE_NAME: session_token}) as c:
        yield c


@pytest.fixture()
def insert(db_session):
    """Insert a row directly and return it."""
    def _insert(model, **kwargs):
        obj = model(**kwargs)
        db_session.add(obj)
        db_session.commit()
        db_session.refresh(obj)
        return obj

    return _insert


@pytest.fixture()
def catalog(insert):
    """A brand, a model of that brand, a device type and an address range."""
    marca = insert(MarcaModel, nome="HP")
    modelo = insert(ModeloModel, nome="LaserJet M428", marca_id=marca.id)
    tipo = insert(TipoModel, nome="Multifuncional")
    faixa = insert(FaixaModel, tipo="faixa", nome="Administrativo", faixa="10.0.10.0/24", vlan_nome="ADM", vlan_id=10)
    return {"marca": marca, "modelo": modelo, "tipo": tipo, "faixa": faixa}


@pytest.fixture()
def make_impressora(insert):
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        values = {
            "setor": "TI",
            "numero_serie": f"SN-{counter['n']:04d}",
            "endereco_ip": f"10.0.10.{counter['n']}",
        }
        values.update(kwargs)
        return insert(ImpressoraModel, **values)

    return _make


@pytest.fixture()
def make_user(insert):
    def _make(username="admin", password="admin123", **kwargs):
        return insert(
            UserModel,
            username=username,
            hashed_password=get_password_hash(password),
            full_name=kwargs.get("full_name", "Administrador"),
            funcao=kwargs.get("funcao", "Administrador"),
            is_admin=kwargs.get("is_admin", True),
            nivel_acesso=kwargs.get("nivel_acesso", "admin"),
        )

    return _make
