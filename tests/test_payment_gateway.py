from urllib.parse import parse_qsl, urlparse

import pytest

from esoteric_planner.shared.adapters.payment_gateway import (
    ProdamusGateway,
    flatten_query,
    sort_recursive,
    unflatten_form,
)
from esoteric_planner.shared.core.exceptions import ConfigurationError
from esoteric_planner.shared.models.enums import PlanType


@pytest.fixture
def prodamus() -> ProdamusGateway:
    return ProdamusGateway(url="https://pay.example.com/", secret_key="secret")


class TestSignature:
    def test_signature_ignores_key_order(self, prodamus):
        first = {"order_id": "A", "products": [{"name": "X", "price": "1"}]}
        second = {"products": [{"price": "1", "name": "X"}], "order_id": "A"}
        assert prodamus.sign(first) == prodamus.sign(second)

    def test_signature_field_is_excluded(self, prodamus):
        data = {"order_id": "A", "sum": "990.00"}
        signed = dict(data, signature=prodamus.sign(data))
        assert prodamus.sign(signed) == prodamus.sign(data)

    def test_verify_accepts_uppercase_hex(self, prodamus):
        data = {"order_id": "A"}
        assert prodamus.verify(data, prodamus.sign(data).upper())

    def test_verify_rejects_tampered_payload(self, prodamus):
        data = {"order_id": "A", "sum": "990.00"}
        signature = prodamus.sign(data)
        assert not prodamus.verify({"order_id": "A", "sum": "1.00"}, signature)

    def test_verify_rejects_missing_or_garbage_signature(self, prodamus):
        assert not prodamus.verify({"order_id": "A"}, None)
        assert not prodamus.verify({"order_id": "A"}, "подпись")

    def test_signing_without_secret_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            ProdamusGateway(url="https://pay.example.com/", secret_key="").sign({})


def test_sort_recursive_keeps_list_order():
    assert sort_recursive({"b": [{"d": 1, "c": 2}, 3], "a": 0}) == {
        "a": 0,
        "b": [{"c": 2, "d": 1}, 3],
    }


def test_unflatten_form_rebuilds_products():
    fields = {
        "order_id": "ORD-1",
        "products[0][name]": "Подписка",
        "products[0][price]": "990.00",
        "products[1][name]": "Бонус",
        "customer_extra[_param_user_id]": "u-1",
    }
    assert unflatten_form(fields) == {
        "order_id": "ORD-1",
        "products": [{"name": "Подписка", "price": "990.00"}, {"name": "Бонус"}],
        "customer_extra": {"_param_user_id": "u-1"},
    }


def test_unflatten_form_keeps_sparse_indexes_as_dict():
    assert unflatten_form({"items[1]": "x"}) == {"items": {"1": "x"}}


def test_flatten_query_brackets_nested_values():
    data = {"order_id": "A", "products": [{"name": "X", "quantity": 1}]}
    assert flatten_query(data) == [
        ("order_id", "A"),
        ("products[0][name]", "X"),
        ("products[0][quantity]", "1"),
    ]


class TestPaymentLink:
    def test_link_carries_plan_and_valid_signature(self, prodamus):
        link = prodamus.create_payment_link(
            order_id="ORD-1",
            customer_email="user@example.com",
            plan_type=PlanType.YEARLY,
            user_id="u-1",
            base_url="https://app.example.com/",
        )
        parsed = urlparse(link)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://pay.example.com/"

        fields = dict(parse_qsl(parsed.query))
        assert fields["products[0][price]"] == "3990.00"
        assert fields["_param_plan_type"] == "yearly"
        assert fields["urlNotification"] == "https://app.example.com/api/payments/webhook"
        assert "customer_phone" not in fields

        signature = fields.pop("signature")
        assert prodamus.verify(unflatten_form(fields), signature)

    def test_phone_is_included_when_given(self, prodamus):
        data = prodamus.build_payment_data(
            order_id="ORD-1",
            customer_email="user@example.com",
            plan_type=PlanType.MONTHLY,
            user_id="u-1",
            base_url="https://app.example.com",
            customer_phone="+79990000000",
        )
        assert data["customer_phone"] == "+79990000000"
        assert data["products"][0]["sum"] == "990.00"

    def test_missing_url_is_a_configuration_error(self):
        gateway = ProdamusGateway(url="", secret_key="secret")
        with pytest.raises(ConfigurationError):
            gateway.create_payment_link(
                order_id="ORD-1",
                customer_email="user@example.com",
                plan_type=PlanType.MONTHLY,
                user_id="u-1",
                base_url="https://app.example.com",
            )


class TestParseWebhook:
    def test_params_found_in_customer_extra(self):
        payload = ProdamusGateway.parse_webhook(
            {
                "order_num": "ORD-2",
                "payment_status": "success",
                "customer_extra": {"_param_user_id": "u-2", "_param_plan_type": "monthly"},
                "products": [{"price": "990.00"}],
            }
        )
        assert payload.order_id == "ORD-2"
        assert payload.user_id == "u-2"
        assert payload.plan_type == "monthly"
        assert payload.sum == "990.00"

    def test_params_found_in_first_product(self):
        payload = ProdamusGateway.parse_webhook(
            {"order_id": "ORD-3", "products": [{"_param_user_id": "u-3"}]}
        )
        assert payload.user_id == "u-3"
        assert payload.plan_type is None

    def test_numeric_order_ids_become_strings(self):
        payload = ProdamusGateway.parse_webhook({"order_id": 1042, "order_num": 77})
        assert payload.order_id == "1042"
        assert payload.order_num == "77"

        fallback = ProdamusGateway.parse_webhook({"order_num": 77})
        assert fallback.order_id == "77"

    def test_defaults_for_empty_body(self):
        payload = ProdamusGateway.parse_webhook({})
        assert payload.order_id == ""
        assert payload.payment_status == "pending"
        assert payload.sum == "0"
