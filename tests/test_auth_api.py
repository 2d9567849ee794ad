from datetime import timedelta

from esoteric_planner.shared.models import utcnow
from esoteric_planner.shared.services.auth_service import AuthService

from tests.conftest import TEST_PASSWORD


async def test_register_creates_trial_user_and_emails_password(client, fake_email, load_user):
    response = await client.post(
        "/api/auth/register",
        json={"email": "New.Reader@Example.com", "first_name": "Анна"},
    )

    assert response.status_code == 201
    user = await load_user(response.json()["user_id"])
    assert user.email == "new.reader@example.com"
    assert user.subscription_tier == "trial"
    assert user.first_name == "Анна"

    email, password = fake_email.welcome[0]
    assert email == "new.reader@example.com"
    assert len(password) == 12

    login = await client.post(
        "/api/auth/login",
        json={"email": "new.reader@example.com", "password": password},
    )
    assert login.status_code == 200


async def test_register_survives_failed_welcome_email(client, fake_email):
    fake_email.succeed = False

    response = await client.post("/api/auth/register", json={"email": "quiet@example.com"})

    assert response.status_code == 201


async def test_register_duplicate_email_is_conflict(client, make_user):
    await make_user(email="taken@example.com")

    response = await client.post("/api/auth/register", json={"email": "TAKEN@example.com"})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


async def test_register_rejects_invalid_email(client):
    response = await client.post("/api/auth/register", json={"email": "not-an-email"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_login_returns_token_and_sets_cookie(client, user, load_user):
    response = await client.post(
        "/api/auth/login",
        json={"email": user.email.upper(), "password": TEST_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == user.email
    assert body["expires_in"] > 0

    cookie = response.headers["set-cookie"]
    assert cookie.startswith(f"access_token={body['access_token']}")
    assert "HttpOnly" in cookie

    stored = await load_user(user.id)
    assert stored.last_login_at is not None


async def test_login_with_wrong_password(client, user):
    response = await client.post(
        "/api/auth/login",
        json={"email": user.email, "password": "wrong-pass"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Неверный email или пароль"


async def test_login_unknown_email(client):
    response = await client.post(
        "/api/auth/login",
        json={"email": "ghost@example.com", "password": TEST_PASSWORD},
    )

    assert response.status_code == 401


async def test_logout_clears_cookie(client):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.headers["set-cookie"].startswith('access_token=""')


class TestCurrentUser:
    async def test_bearer_token(self, client, user, user_headers):
        response = await client.get("/api/auth/user", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["id"] == str(user.id)

    async def test_cookie_token(self, client, user):
        token, _ = AuthService.create_token(user)

        response = await client.get("/api/auth/user", headers={"Cookie": f"access_token={token}"})

        assert response.status_code == 200
        assert response.json()["email"] == user.email

    async def test_missing_token(self, client):
        response = await client.get("/api/auth/user")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    async def test_invalid_token(self, client):
        response = await client.get(
            "/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    async def test_update_nickname(self, client, user_headers):
        response = await client.patch(
            "/api/auth/user", json={"nickname": "  Звёздная  "}, headers=user_headers
        )

        assert response.status_code == 200
        assert response.json()["nickname"] == "Звёздная"


class TestPasswords:
    async def test_reset_flow(self, client, user, fake_email):
        response = await client.post(
            "/api/auth/password-reset/request", json={"email": user.email}
        )
        assert response.status_code == 200
        assert fake_email.resets[0][0] == user.email

        confirm = await client.post(
            "/api/auth/password-reset/confirm",
            json={
                "email": user.email,
                "token": fake_email.last_reset_token(),
                "new_password": "new-secret",
            },
        )
        assert confirm.status_code == 200

        login = await client.post(
            "/api/auth/login", json={"email": user.email, "password": "new-secret"}
        )
        assert login.status_code == 200

    async def test_reset_token_is_single_use(self, client, user, fake_email):
        await client.post("/api/auth/password-reset/request", json={"email": user.email})
        payload = {
            "email": user.email,
            "token": fake_email.last_reset_token(),
            "new_password": "new-secret",
        }

        first = await client.post("/api/auth/password-reset/confirm", json=payload)
        second = await client.post("/api/auth/password-reset/confirm", json=payload)

        assert first.status_code == 200
        assert second.status_code == 400

    async def test_reset_request_for_unknown_email_looks_the_same(self, client, user, fake_email):
        known = await client.post("/api/auth/password-reset/request", json={"email": user.email})
        unknown = await client.post(
            "/api/auth/password-reset/request", json={"email": "ghost@example.com"}
        )

        assert known.json() == unknown.json()
        assert len(fake_email.resets) == 1

    async def test_reset_with_wrong_token(self, client, user):
        await client.post("/api/auth/password-reset/request", json={"email": user.email})

        response = await client.post(
            "/api/auth/password-reset/confirm",
            json={"email": user.email, "token": "0" * 64, "new_password": "new-secret"},
        )

        assert response.status_code == 400

    async def test_change_password(self, client, user, user_headers):
        wrong = await client.post(
            "/api/auth/change-password",
            json={"current_password": "nope", "new_password": "brand-new"},
            headers=user_headers,
        )
        assert wrong.status_code == 400

        response = await client.post(
            "/api/auth/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new"},
            headers=user_headers,
        )
        assert response.status_code == 200

        login = await client.post(
            "/api/auth/login", json={"email": user.email, "password": "brand-new"}
        )
        assert login.status_code == 200

    async def test_short_new_password_is_rejected(self, client, user_headers):
        response = await client.post(
            "/api/auth/change-password",
            json={"current_password": TEST_PASSWORD, "new_password": "123"},
            headers=user_headers,
        )

        assert response.status_code == 400


class TestAccessStatus:
    async def test_trial_user(self, client, user_headers):
        response = await client.get("/api/auth/access", headers=user_headers)

        assert response.json() == {"has_access": True, "days_left": 3, "reason": None}

    async def test_expired_trial(self, client, make_user):
        expired = await make_user(trial_ends_at=utcnow() - timedelta(days=1))
        token, _ = AuthService.create_token(expired)

        response = await client.get(
            "/api/auth/access", headers={"Authorization": f"Bearer {token}"}
        )

        body = response.json()
        assert body["has_access"] is False
        assert body["reason"]

    async def test_admin(self, client, admin_headers):
        response = await client.get("/api/auth/access", headers=admin_headers)

        assert response.json()["days_left"] == -1
