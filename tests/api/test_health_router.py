from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from cohort_backend.api.main import create_app
from cohort_backend.boundary.db import get_async_db


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def client(mock_db):
    app = create_app()

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_async_db] = override_db
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client, mock_db):
    response = client.get("/api/v1/health/db")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    mock_db.execute.assert_awaited_once()


def test_health_check_db_unreachable(client, mock_db):
    mock_db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "message": "Database unreachable"}


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/v1/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}
