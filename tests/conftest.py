import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.session import ConnectionState
from app.main import create_app
from app.services.credential_store import CredentialStore
from app.services.inventory_store import InventoryStore
from app.storage import StorageSelector, create_memory_backend

TEST_SECRET = "test-secret"


def make_settings(database_url: str, **overrides) -> Settings:
    values = {
        "DATABASE_URL": database_url,
        "JWT_SECRET_KEY": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "DB_CONNECT_TIMEOUT_SECONDS": 1,
        "DB_RECONNECT_INTERVAL_SECONDS": 3600,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


def sqlite_url(path) -> str:
    return f"sqlite:///{path}"


def unreachable_sqlite_url(tmp_path) -> str:
    # SQLite cannot open a file inside a directory that does not exist
    return sqlite_url(tmp_path / "missing" / "autorent.db")


class FakeProbe:
    """Availability probe whose answer the test controls."""

    def __init__(self, available: bool = False):
        self.available = available

    @property
    def state(self) -> ConnectionState:
        return ConnectionState.CONNECTED if self.available else ConnectionState.DISCONNECTED

    def is_available(self) -> bool:
        return self.available


@pytest.fixture()
def frontend_dir(tmp_path):
    path = tmp_path / "frontend"
    path.mkdir()
    (path / "index.html").write_text("<html><body>AutoRent</body></html>")
    (path / "style.css").write_text("body { margin: 0; }")
    return path


@pytest.fixture()
def sql_app(tmp_path, frontend_dir):
    return create_app(make_settings(sqlite_url(tmp_path / "autorent.db"), FRONTEND_DIR=str(frontend_dir)))


@pytest.fixture()
def memory_app(tmp_path, frontend_dir):
    return create_app(make_settings(unreachable_sqlite_url(tmp_path), FRONTEND_DIR=str(frontend_dir)))


@pytest.fixture()
def sql_client(sql_app):
    with TestClient(sql_app) as client:
        yield client


@pytest.fixture()
def memory_client(memory_app):
    with TestClient(memory_app) as client:
        yield client


@pytest.fixture(params=["sql", "memory"])
def client(request):
    """Runs the test once against each backing."""
    with TestClient(request.getfixturevalue(f"{request.param}_app")) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers(client):
    response = client.post("/api/auth/register", json={"email": "owner@example.com", "password": "pw123456"})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def probe():
    return FakeProbe(available=False)


@pytest.fixture()
def selector(probe):
    """Two in-memory backings standing in for durable and fallback storage."""
    return StorageSelector(
        probe=probe,
        durable=create_memory_backend(name="Durable (fake)"),
        fallback=create_memory_backend(),
    )


@pytest.fixture()
def inventory(selector):
    return InventoryStore(selector)


@pytest.fixture()
def credentials(selector):
    return CredentialStore(selector, bcrypt_rounds=4)


@pytest.fixture()
def car_fields():
    return {
        "model": "Toyota Corolla",
        "type": "Sedan",
        "year": 2022,
        "dailyRate": 45.0,
        "status": "Available",
        "description": "Automatic, 5 seats",
    }
