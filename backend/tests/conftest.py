"""Shared fixtures: an isolated app per test with its own SQLite file and upload dir."""

from urllib.parse import urlparse

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

PUBLIC_BASE = "http://testserver/uploads/images"


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def app_settings(tmp_path, upload_dir) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'inventory-test.db'}",
        UPLOAD_DIR=str(upload_dir),
        PUBLIC_BASE_URL=PUBLIC_BASE,
    )


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture(name="client")
def client_fixture(app):
    """Create a test client; entering it runs the lifespan (engine + tables)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def create_product(client):
    def _create(**form):
        files = form.pop("files", None)
        response = client.post("/api/products", data=form, files=files)
        assert response.status_code == 201, response.text
        return response.json()["product"]

    return _create


def image_file(name="photo.png", payload=b"\x89PNG fake image bytes", content_type="image/png"):
    return {"Image": (name, payload, content_type)}


def stored_name(image_url: str) -> str:
    return urlparse(image_url).path.rsplit("/", 1)[-1]
