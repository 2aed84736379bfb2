import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cms.app import create_app
from cms.auth.users import CredentialStore
from cms.config import Settings
from cms.infra.document_repo import DocumentStore

ADMIN_PASSWORD = "secret"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at an isolated data dir and users file."""
    return Settings(
        data_dir=tmp_path / "data",
        users_path=tmp_path / "users.yml",
        secret_key="test-secret",
    )


@pytest.fixture()
def documents(settings: Settings) -> DocumentStore:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return DocumentStore(settings.data_dir)


@pytest.fixture()
def credentials(settings: Settings) -> CredentialStore:
    store = CredentialStore(settings.users_path)
    store.register("admin", ADMIN_PASSWORD)
    return store


@pytest.fixture()
def client(settings: Settings, documents, credentials):
    app = create_app(settings)
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture()
def admin_client(client):
    r = client.post("/users/signin", data={"username": "admin", "password": ADMIN_PASSWORD})
    assert r.status_code == 302
    # consume the "Welcome!" flash
    client.get("/")
    return client
