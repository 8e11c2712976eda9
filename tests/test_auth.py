"""
Registration and token tests.
"""


class TestRegister:

    def test_registers_user(self, client):
        response = client.post("/auth/register", json={
            "email": "New@Example.com",
            "password": "SecurePassword123!",
            "name": "New",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "new@example.com"
        assert body["is_superuser"] is False
        assert "password_hash" not in body

    def test_duplicate_email_is_rejected(self, client, customer):
        response = client.post("/auth/register", json={
            "email": "customer@example.com",
            "password": "SecurePassword123!",
        })

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Email already registered"}

    def test_short_password_is_rejected(self, client):
        response = client.post("/auth/register", json={"email": "a@example.com", "password": "short"})

        assert response.status_code == 400
        assert "password" in response.json()["errors"]


class TestToken:

    def test_issues_bearer_token(self, client, customer):
        response = client.post("/auth/token", data={
            "username": "customer@example.com",
            "password": "SecurePassword123!",
        })

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

        orders = client.get("/orders", headers={"Authorization": f"Bearer {response.json()['access_token']}"})
        assert orders.status_code == 200

    def test_wrong_password_is_unauthorized(self, client, customer):
        response = client.post("/auth/token", data={
            "username": "customer@example.com",
            "password": "wrong-password",
        })

        assert response.status_code == 401
        assert response.json()["error"] == "Incorrect email or password"
