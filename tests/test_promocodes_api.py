from datetime import timedelta

from esoteric_planner.shared.models import utcnow
from esoteric_planner.shared.models.base import as_utc
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.repositories.promocode_repository import PromocodeRepository

from tests.conftest import auth_headers


async def create_code(client, admin_headers, **fields):
    response = await client.post("/api/admin/promocodes", json=fields, headers=admin_headers)
    assert response.status_code == 201
    return response.json()


async def activate(client, headers, code):
    return await client.post("/api/promocodes/activate", json={"code": code}, headers=headers)


class TestAdminPromocodes:
    async def test_code_is_upper_cased_with_defaults(self, client, admin_headers):
        promocode = await create_code(client, admin_headers, code="  luna ")

        assert promocode["code"] == "LUNA"
        assert promocode["bonus_days"] == 30
        assert promocode["max_uses"] == 1
        assert promocode["used_count"] == 0
        assert promocode["is_active"] is True

        listed = await client.get("/api/admin/promocodes", headers=admin_headers)
        assert [item["code"] for item in listed.json()] == ["LUNA"]

    async def test_duplicate_code_is_conflict(self, client, admin_headers):
        await create_code(client, admin_headers, code="LUNA")

        response = await client.post(
            "/api/admin/promocodes", json={"code": "luna"}, headers=admin_headers
        )

        assert response.status_code == 409


class TestActivation:
    async def test_trial_user_becomes_monthly(self, client, admin_headers, user, user_headers, load_user):
        await create_code(client, admin_headers, code="STAR7", bonus_days=7)
        trial_end = as_utc(user.trial_ends_at)

        response = await activate(client, user_headers, " star7 ")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Промокод активирован! Добавлено 7 дней",
            "bonus_days": 7,
        }
        stored = await load_user(user.id)
        assert stored.subscription_tier == "monthly"
        assert as_utc(stored.subscription_expires_at) == trial_end + timedelta(days=7)

    async def test_paid_user_gets_days_added_to_expiry(self, client, admin_headers, make_user, load_user):
        expires_at = utcnow() + timedelta(days=10)
        subscriber = await make_user(
            subscription_tier=SubscriptionTier.YEARLY.value,
            subscription_expires_at=expires_at,
        )
        await create_code(client, admin_headers, code="BONUS", bonus_days=2)

        response = await activate(client, auth_headers(subscriber), "BONUS")

        assert response.json()["message"] == "Промокод активирован! Добавлено 2 дня"
        stored = await load_user(subscriber.id)
        assert stored.subscription_tier == "yearly"
        expected = as_utc(subscriber.subscription_expires_at) + timedelta(days=2)
        assert as_utc(stored.subscription_expires_at) == expected

    async def test_used_count_is_incremented(self, client, admin_headers, user_headers):
        await create_code(client, admin_headers, code="MANY", max_uses=5)

        await activate(client, user_headers, "MANY")

        listed = await client.get("/api/admin/promocodes", headers=admin_headers)
        assert listed.json()[0]["used_count"] == 1

    async def test_unknown_code(self, client, user_headers):
        response = await activate(client, user_headers, "NOPE")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Промокод не найден"

    async def test_expired_code(self, client, admin_headers, user_headers):
        await create_code(
            client,
            admin_headers,
            code="OLD",
            expires_at=(utcnow() - timedelta(days=1)).isoformat(),
        )

        response = await activate(client, user_headers, "OLD")

        assert response.json()["error"]["message"] == "Срок действия промокода истёк"

    async def test_exhausted_code(self, client, admin_headers, user_headers, make_user):
        await create_code(client, admin_headers, code="ONCE")
        other = await make_user()
        assert (await activate(client, auth_headers(other), "ONCE")).status_code == 200

        response = await activate(client, user_headers, "ONCE")

        assert response.json()["error"]["message"] == "Промокод исчерпан"

    async def test_same_user_cannot_reuse_code(self, client, admin_headers, user_headers):
        await create_code(client, admin_headers, code="TWICE", max_uses=10)
        assert (await activate(client, user_headers, "TWICE")).status_code == 200

        response = await activate(client, user_headers, "TWICE")

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Вы уже использовали этот промокод"

    async def test_inactive_code(self, client, admin_headers, user_headers, db_session):
        await create_code(client, admin_headers, code="OFF")
        repo = PromocodeRepository(db_session)
        promocode = await repo.get_by_code("OFF")
        await repo.apply(promocode, is_active=False)
        await db_session.commit()

        response = await activate(client, user_headers, "OFF")

        assert response.json()["error"]["message"] == "Промокод неактивен"
