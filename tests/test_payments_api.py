from datetime import timedelta
import re

from esoteric_planner.api.dependencies.services import get_gateway
from esoteric_planner.shared.adapters.payment_gateway import ProdamusGateway, flatten_query
from esoteric_planner.shared.models import utcnow
from esoteric_planner.shared.models.base import as_utc

from tests.conftest import auth_headers


ORDER_ID_RE = re.compile(r"^ORD-\d{14}-[0-9A-F]{8}$")


def webhook_body(order_id: str, status: str = "success", **extra) -> dict:
    body = {
        "date": "2026-10-18T12:00:00+03:00",
        "order_id": order_id,
        "sum": "990.00",
        "customer_email": "user@example.com",
        "payment_status": status,
        "products": [{"name": "Подписка", "price": "990.00", "quantity": "1", "sum": "990.00"}],
    }
    body.update(extra)
    return body


async def post_form_webhook(client, gateway, body: dict, signature=None):
    return await client.post(
        "/api/payments/webhook",
        data=dict(flatten_query(body)),
        headers={"Sign": signature if signature is not None else gateway.sign(body)},
    )


async def create_order(client, headers, plan_type: str = "monthly") -> dict:
    response = await client.post(
        "/api/payments/create", json={"plan_type": plan_type}, headers=headers
    )
    assert response.status_code == 200
    return response.json()


class TestCreatePayment:
    async def test_returns_link_and_records_pending_payment(self, client, user_headers):
        order = await create_order(client, user_headers, "yearly")

        assert order["payment_url"].startswith("https://pay.example.com/?")
        assert ORDER_ID_RE.match(order["order_id"])

        history = await client.get("/api/payments/history", headers=user_headers)
        [payment] = history.json()
        assert payment["order_id"] == order["order_id"]
        assert payment["status"] == "pending"
        assert payment["amount"] == "3990.00"
        assert payment["plan_type"] == "yearly"

    async def test_unknown_plan_is_rejected(self, client, user_headers):
        response = await client.post(
            "/api/payments/create", json={"plan_type": "weekly"}, headers=user_headers
        )

        assert response.status_code == 400

    async def test_unconfigured_gateway(self, app, client, user_headers):
        app.dependency_overrides[get_gateway] = lambda: ProdamusGateway(url="", secret_key="")

        response = await client.post(
            "/api/payments/create", json={"plan_type": "monthly"}, headers=user_headers
        )

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "NOT_CONFIGURED"


class TestWebhook:
    async def test_success_extends_access(self, client, gateway, user, user_headers, load_user):
        order = await create_order(client, user_headers)
        before = utcnow()

        response = await post_form_webhook(client, gateway, webhook_body(order["order_id"]))

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        stored = await load_user(user.id)
        assert stored.subscription_tier == "monthly"
        assert as_utc(stored.subscription_expires_at) >= before + timedelta(days=30)

        history = await client.get("/api/payments/history", headers=user_headers)
        assert history.json()[0]["status"] == "success"

    async def test_repeated_success_is_applied_once(self, client, gateway, user, user_headers, load_user):
        order = await create_order(client, user_headers)
        body = webhook_body(order["order_id"])

        await post_form_webhook(client, gateway, body)
        first_expiry = (await load_user(user.id)).subscription_expires_at
        repeated = await post_form_webhook(client, gateway, body)

        assert repeated.status_code == 200
        assert (await load_user(user.id)).subscription_expires_at == first_expiry

    async def test_invalid_signature(self, client, gateway, user, user_headers, load_user):
        order = await create_order(client, user_headers)

        response = await post_form_webhook(
            client, gateway, webhook_body(order["order_id"]), signature="0" * 64
        )

        assert response.status_code == 401
        assert (await load_user(user.id)).subscription_tier == "trial"

    async def test_missing_signature(self, client):
        response = await client.post("/api/payments/webhook", json=webhook_body("ORD-1"))

        assert response.status_code == 401

    async def test_cancelled_order_is_marked_failed(self, client, gateway, user, user_headers, load_user):
        order = await create_order(client, user_headers)

        response = await post_form_webhook(
            client, gateway, webhook_body(order["order_id"], status="order_canceled")
        )

        assert response.status_code == 200
        history = await client.get("/api/payments/history", headers=user_headers)
        assert history.json()[0]["status"] == "failed"
        assert (await load_user(user.id)).subscription_tier == "trial"

    async def test_json_webhook_for_unknown_order_uses_custom_params(
        self, client, gateway, user, load_user
    ):
        body = webhook_body(
            "ORD-EXTERNAL",
            sum="3990.00",
            _param_user_id=str(user.id),
            _param_plan_type="yearly",
        )
        body["signature"] = gateway.sign(body)

        response = await client.post("/api/payments/webhook", json=body)

        assert response.status_code == 200
        stored = await load_user(user.id)
        assert stored.subscription_tier == "yearly"
        assert as_utc(stored.subscription_expires_at) > utcnow() + timedelta(days=364)

        history = await client.get("/api/payments/history", headers=auth_headers(user))
        [payment] = history.json()
        assert payment["order_id"] == "ORD-EXTERNAL"
        assert payment["amount"] == "3990.00"
        assert payment["status"] == "success"

    async def test_json_webhook_with_numeric_order_id(self, client, gateway, user):
        body = webhook_body(
            90417,
            _param_user_id=str(user.id),
            _param_plan_type="monthly",
        )

        response = await client.post(
            "/api/payments/webhook", json=body, headers={"Sign": gateway.sign(body)}
        )

        assert response.status_code == 200
        history = await client.get("/api/payments/history", headers=auth_headers(user))
        assert history.json()[0]["order_id"] == "90417"

    async def test_unknown_order_without_user(self, client, gateway):
        response = await post_form_webhook(client, gateway, webhook_body("ORD-ORPHAN"))

        assert response.status_code == 400

    async def test_json_body_must_be_an_object(self, client):
        response = await client.post(
            "/api/payments/webhook", content="[1, 2]", headers={"content-type": "application/json"}
        )

        assert response.status_code == 400


async def test_history_is_private(client, user_headers, make_user):
    other = await make_user()
    await create_order(client, auth_headers(other))

    assert (await client.get("/api/payments/history", headers=user_headers)).json() == []
