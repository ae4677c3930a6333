"""API tests for /api/auth and the bearer token chain."""

from buildhub.application.services.auth_service import create_access_token


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Signup and login
# =============================================================================


class TestSignup:
    def test_signup_returns_user_and_token(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"email": "new@example.com", "password": "secret123", "name": "New Person"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["role"] == "user"
        assert body["user"]["avatar"] == "NP"
        assert "password_hash" not in body["user"]

    def test_duplicate_email(self, client, register):
        register("dup@example.com")
        response = client.post(
            "/api/auth/signup",
            json={"email": "dup@example.com", "password": "secret123", "name": "Dup"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "User with this email already exists"}

    def test_field_level_validation_errors(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"email": "short@example.com", "password": "123", "name": "Shorty"},
        )

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["password"]

    def test_welcome_notification(self, client, user_session):
        _, headers = user_session
        notifications = client.get("/api/notifications", headers=headers).json()["notifications"]

        assert [n["title"] for n in notifications] == ["Welcome!"]


class TestLogin:
    def test_login(self, client, user_session):
        response = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "jane@example.com"

    def test_wrong_password(self, client, user_session):
        response = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_default_admin_is_seeded(self, admin_session):
        admin, _ = admin_session
        assert admin["role"] == "admin"


# =============================================================================
# Token chain
# =============================================================================


class TestTokenChain:
    def test_missing_token(self, client):
        response = client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json()["message"] == "Access token required"

    def test_invalid_token(self, client):
        response = client.get("/api/auth/profile", headers=auth_headers("garbage"))

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_vanished_user(self, client):
        token = create_access_token({"sub": "no-such-user"})
        response = client.get("/api/auth/profile", headers=auth_headers(token))

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"


class TestProfile:
    def test_get_and_update_profile(self, client, user_session):
        user, headers = user_session

        assert client.get("/api/auth/profile", headers=headers).json()["user"]["id"] == user["id"]

        response = client.put("/api/auth/profile", json={"name": "Jane Architect", "avatar": "JA"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Jane Architect"
        assert response.json()["user"]["avatar"] == "JA"


# =============================================================================
# Passwords
# =============================================================================


class TestPasswordFlows:
    def test_forgot_password_does_not_reveal_accounts(self, client, user_session):
        known = client.post("/api/auth/forgot-password", json={"email": "jane@example.com"}).json()
        unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@example.com"}).json()

        assert known["message"] == unknown["message"]
        assert "reset_token" not in unknown

    def test_reset_flow(self, client, user_session):
        token = client.post("/api/auth/forgot-password", json={"email": "jane@example.com"}).json()["reset_token"]

        verify = client.get(f"/api/auth/verify-reset-token/{token}")
        assert verify.status_code == 200
        assert verify.json()["valid"] is True

        response = client.post("/api/auth/reset-password", json={"token": token, "password": "newpass1"})
        assert response.status_code == 200

        login = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "newpass1"})
        assert login.status_code == 200

        reused = client.get(f"/api/auth/verify-reset-token/{token}")
        assert reused.status_code == 400
        assert reused.json()["valid"] is False

        again = client.post("/api/auth/reset-password", json={"token": token, "password": "another1"})
        assert again.status_code == 400

    def test_change_password(self, client, user_session):
        _, headers = user_session

        wrong = client.post(
            "/api/auth/change-password",
            json={"current_password": "wrong", "new_password": "newpass1"},
            headers=headers,
        )
        assert wrong.status_code == 400

        ok = client.post(
            "/api/auth/change-password",
            json={"current_password": "secret123", "new_password": "newpass1"},
            headers=headers,
        )
        assert ok.status_code == 200
        assert client.post(
            "/api/auth/login", json={"email": "jane@example.com", "password": "newpass1"},
        ).status_code == 200


# =============================================================================
# Per-app settings
# =============================================================================


class TestAppSettings:
    def test_production_does_not_echo_reset_tokens(self, client_with):
        client = client_with(ENVIRONMENT="production")
        client.post("/api/auth/signup", json={"email": "jane@example.com", "password": "secret123", "name": "Jane"})

        response = client.post("/api/auth/forgot-password", json={"email": "jane@example.com"})
        assert response.status_code == 200
        assert "reset_token" not in response.json()

    def test_tokens_are_signed_with_the_app_secret(self, client_with):
        client = client_with(SECRET_KEY="site-secret")
        body = client.post(
            "/api/auth/signup",
            json={"email": "jane@example.com", "password": "secret123", "name": "Jane"},
        ).json()

        assert client.get("/api/auth/profile", headers=auth_headers(body["token"])).status_code == 200

        foreign = create_access_token({"sub": body["user"]["id"], "role": "user"})
        response = client.get("/api/auth/profile", headers=auth_headers(foreign))
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"


# =============================================================================
# Rate limits
# =============================================================================


class TestRateLimits:
    def test_sixth_failed_login_is_rejected(self, client, user_session):
        wrong = {"email": "jane@example.com", "password": "wrong"}
        for _ in range(5):
            assert client.post("/api/auth/login", json=wrong).status_code == 401

        response = client.post("/api/auth/login", json=wrong)
        assert response.status_code == 429
        assert response.json() == {"message": "Too many authentication attempts, please try again later."}

    def test_limits_are_counted_per_route(self, client, user_session):
        wrong = {"email": "jane@example.com", "password": "wrong"}
        for _ in range(6):
            client.post("/api/auth/login", json=wrong)

        response = client.post("/api/auth/forgot-password", json={"email": "jane@example.com"})
        assert response.status_code == 200

    def test_limit_comes_from_settings(self, client_with):
        client = client_with(AUTH_RATE_LIMIT="2/minute")
        wrong = {"email": "nobody@example.com", "password": "wrong"}

        assert [client.post("/api/auth/login", json=wrong).status_code for _ in range(3)] == [401, 401, 429]

    def test_limits_can_be_switched_off(self, client_with):
        client = client_with(RATE_LIMIT_ENABLED=False)
        wrong = {"email": "nobody@example.com", "password": "wrong"}

        assert {client.post("/api/auth/login", json=wrong).status_code for _ in range(8)} == {401}
