"""
Integration tests for authentication endpoints

Company registration, login and profile retrieval through the API
"""
class TestRegisterCompany:
    """Test registration endpoint: POST /api/v1/auth/register"""

    def test_register_returns_admin_and_token(self, client, register):
        data = register()

        assert data["token_type"] == "bearer"
        assert "access_token" in data
        assert data["user"]["email"] == "rita@pedras.com"
        assert data["user"]["role"] == "admin"
        assert data["user"]["company_id"].startswith("COMP-")
        assert "password_hash" not in data["user"]

    def test_register_duplicate_email_fails(self, client, register):
        register()

        response = client.post(
            "/api/v1/auth/register",
            json={
                "admin_name": "Outra",
                "email": "rita@pedras.com",
                "company_name": "Outra Marmoraria",
                "password": "segredo123",
            },
        )

        assert response.status_code == 409
        assert response.json()["error"] == "CONFLICT"

    def test_register_short_password_fails(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={
                "admin_name": "Ana",
                "email": "ana@pedras.com",
                "company_name": "Ana Pedras",
                "password": "123",
            },
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "password"

    def test_register_missing_fields(self, client):
        response = client.post("/api/v1/auth/register", json={"email": "ana@pedras.com"})

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestLogin:
    """Test login endpoint: POST /api/v1/auth/login"""

    def test_login_with_valid_credentials(self, client, register):
        register()

        response = client.post(
            "/api/v1/auth/login",
            data={"username": "rita@pedras.com", "password": "segredo123"},  # OAuth2 uses 'username'
        )

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Rita Alves"

    def test_login_with_wrong_password(self, client, register):
        register()

        response = client.post(
            "/api/v1/auth/login",
            data={"username": "rita@pedras.com", "password": "errada123"},
        )

        assert response.status_code == 401

    def test_login_suspended_company(self, client, register, super_admin_headers):
        company_id = register()["user"]["company_id"]
        client.patch(
            f"/api/v1/platform/companies/{company_id}/status",
            json={"status": "suspended"},
            headers=super_admin_headers,
        )

        response = client.post(
            "/api/v1/auth/login",
            data={"username": "rita@pedras.com", "password": "segredo123"},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "COMPANY_SUSPENDED"


class TestGetCurrentUser:
    """Test get current user endpoint: GET /api/v1/auth/me"""

    def test_get_current_user_with_valid_token(self, client, admin_headers):
        response = client.get("/api/v1/auth/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "rita@pedras.com"

    def test_get_current_user_without_token(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_get_current_user_with_invalid_token(self, client):
        response = client.get(
            "/api/v1/auth/me",
            headers={"Authorization": "Bearer invalid.token.here"}
        )

        assert response.status_code == 401

    def test_suspended_company_token_is_rejected(self, client, register, super_admin_headers):
        data = register()
        headers = {"Authorization": f"Bearer {data['access_token']}"}
        client.patch(
            f"/api/v1/platform/companies/{data['user']['company_id']}/status",
            json={},
            headers=super_admin_headers,
        )

        response = client.get("/api/v1/auth/me", headers=headers)

        assert response.status_code == 403


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
