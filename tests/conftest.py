"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from sociaty.core.config import Settings
from sociaty.core.store import JsonStore
from sociaty.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every on-disk location at a per-test temp directory."""
    return Settings(
        data_file=tmp_path / "db.json",
        upload_dir=tmp_path / "uploads",
        public_dir=tmp_path / "public",
    )


@pytest.fixture
def store(settings):
    return JsonStore(settings.data_file)


@pytest.fixture
def client(settings):
    """Test client for an app bound to the temp settings (runs startup)."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Register a student and return the credentials used."""
    creds = {"name": "Test Student", "studentId": "S1001", "password": "hunter2"}
    response = client.post("/api/register", json=creds)
    assert response.status_code == 200
    return creds


@pytest.fixture
def make_listing(client):
    """Create a listing through the API and return it."""

    def _make(title="Desk lamp", price="10", category="misc", desc="", student_id="S1001", files=None):
        response = client.post(
            "/api/listings",
            data={
                "title": title,
                "desc": desc,
                "price": price,
                "category": category,
                "studentId": student_id,
            },
            files=files,
        )
        assert response.status_code == 200, response.text
        return response.json()["listing"]

    return _make
