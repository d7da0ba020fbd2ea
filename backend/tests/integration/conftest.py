"""
Fixtures for API tests: a TestClient bound to the in-memory test database
"""
import pytest
from fastapi.testclient import TestClient

from marmoraria.db.session import get_db
from marmoraria.main import app
from marmoraria.services import account_service


@pytest.fixture
def client(db_session):
    """Create a test client with database override"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a company through the API and return the response body"""
    def _register(email="rita@pedras.com", company="Pedras Finas", name="Rita Alves"):
        response = client.post(
            "/api/v1/auth/register",
            json={
                "admin_name": name,
                "email": email,
                "company_name": company,
                "password": "segredo123",
            },
        )
        assert response.status_code == 201
        return response.json()

    return _register


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(register):
    return bearer(register()["access_token"])


@pytest.fixture
def super_admin_headers(client, db_session):
    account_service.ensure_super_admin(db_session, "root@plataforma.com", "raiz1234", "Root")
    response = client.post(
        "/api/v1/auth/login",
        data={"username": "root@plataforma.com", "password": "raiz1234"},
    )
    return bearer(response.json()["access_token"])
