"""
Integration tests for the team and platform console endpoints
"""


class TestTeam:

    def test_admin_adds_operator(self, client, admin_headers):
        response = client.post(
            "/api/v1/team",
            json={"name": "Paulo", "email": "paulo@pedras.com", "role": "operator", "password": "serra123"},
            headers=admin_headers,
        )
        team = client.get("/api/v1/team", headers=admin_headers).json()

        assert response.status_code == 201
        assert response.json()["role"] == "operator"
        assert [u["name"] for u in team] == ["Paulo", "Rita Alves"]


class TestPlatform:

    def test_regular_admin_is_forbidden(self, client, admin_headers):
        assert client.get("/api/v1/platform/companies", headers=admin_headers).status_code == 403

    def test_create_and_list_companies(self, client, super_admin_headers):
        created = client.post(
            "/api/v1/platform/companies",
            json={
                "admin_name": "Beto",
                "email": "beto@granitos.com",
                "company_name": "Arte em Granito",
                "password": "segredo123",
                "monthly_fee": 150.0,
            },
            headers=super_admin_headers,
        )
        companies = client.get("/api/v1/platform/companies", headers=super_admin_headers).json()

        assert created.status_code == 201
        assert created.json()["status"] == "active"
        assert [(c["name"], c["slab_count"]) for c in companies] == [("Arte em Granito", 0)]

    def test_status_fee_and_admin(self, client, register, super_admin_headers):
        company_id = register()["user"]["company_id"]
        base = f"/api/v1/platform/companies/{company_id}"

        toggled = client.patch(f"{base}/status", json={}, headers=super_admin_headers).json()
        fee = client.patch(f"{base}/fee", json={"monthly_fee": 89.9}, headers=super_admin_headers).json()
        negative = client.patch(f"{base}/fee", json={"monthly_fee": -5}, headers=super_admin_headers)
        admin = client.get(f"{base}/admin", headers=super_admin_headers).json()

        assert toggled["status"] == "suspended"
        assert fee["monthly_fee"] == 89.9
        assert negative.status_code == 400
        assert admin["email"] == "rita@pedras.com"

    def test_summary(self, client, register, super_admin_headers):
        register()

        summary = client.get("/api/v1/platform/summary", headers=super_admin_headers).json()

        assert summary["company_count"] == 1
        assert summary["active_companies"] == 1
        assert summary["monthly_revenue"] == 0.0
