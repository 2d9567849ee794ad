"""
Payment gateway adapter - Prodamus payment links and webhooks.

Signature Scheme:
=================
Both directions use the same HMAC:

    1. Drop the "signature" key
    2. Sort dict keys recursively (lists keep their order)
    3. Serialize as compact JSON, non-ASCII kept as is
    4. HMAC-SHA256 with PRODAMUS_SECRET_KEY, hex digest

Payment Link:
=============
    {PRODAMUS_URL}?order_id=...&customer_email=...
        &products[0][name]=...&products[0][price]=990.00
        &products[0][quantity]=1&products[0][sum]=990.00
        &do=link&urlReturn=...&urlSuccess=...&urlNotification=...
        &_param_user_id=...&_param_plan_type=monthly&signature=...

Webhook:
========
Prodamus posts form-encoded fields with bracketed keys. unflatten_form()
turns them back into the nested structure the signature was computed on:

    products[0][name]=X   →   {"products": [{"name": "X"}]}
"""

from dataclasses import dataclass
import hashlib
import hmac
import json
import logging
import re
from typing import Any, Optional
from urllib.parse import urlencode

from ...config.settings import settings
from ..core.exceptions import ConfigurationError
from ..models.enums import PlanType

logger = logging.getLogger(__name__)

PRODUCT_NAMES = {
    PlanType.MONTHLY: "Эзотерический Планировщик - Месячная подписка",
    PlanType.YEARLY: "Эзотерический Планировщик - Годовая подписка",
}

_BRACKET_KEY_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_BRACKET_PART_RE = re.compile(r"\[([^\[\]]*)\]")


@dataclass
class WebhookPayload:
    """Normalized Prodamus notification."""

    order_id: str
    payment_status: str
    sum: str
    user_id: Optional[str] = None
    plan_type: Optional[str] = None
    order_num: Optional[str] = None
    payment_status_description: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    signature: Optional[str] = None
    date: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# PAYLOAD HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


def sort_recursive(value: Any) -> Any:
    """Sort dict keys at every level. Lists keep their order."""
    if isinstance(value, dict):
        return {key: sort_recursive(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [sort_recursive(item) for item in value]
    return value


def _listify(value: Any) -> Any:
    """Turn dicts keyed by "0".."n-1" into lists, recursively."""
    if isinstance(value, dict):
        converted = {key: _listify(item) for key, item in value.items()}
        keys = list(converted)
        if keys and all(key.isdigit() for key in keys):
            indexes = sorted(int(key) for key in keys)
            if indexes == list(range(len(indexes))):
                return [converted[str(index)] for index in indexes]
        return converted
    if isinstance(value, list):
        return [_listify(item) for item in value]
    return value


def unflatten_form(fields: dict[str, Any]) -> dict[str, Any]:
    """
    Rebuild nested data from bracketed form keys.

    Example:
        >>> unflatten_form({"products[0][name]": "X", "sum": "990.00"})
        {'products': [{'name': 'X'}], 'sum': '990.00'}
    """
    result: dict[str, Any] = {}

    for raw_key, value in fields.items():
        match = _BRACKET_KEY_RE.match(raw_key)
        if not match:
            result[raw_key] = value
            continue

        path = [match.group(1)] + _BRACKET_PART_RE.findall(match.group(2))
        node = result
        for part in path[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[path[-1]] = value

    return _listify(result)


def flatten_query(data: dict[str, Any]) -> list[tuple[str, str]]:
    """Flatten nested data into bracketed query pairs, in insertion order."""
    pairs: list[tuple[str, str]] = []

    def _add(prefix: str, value: Any) -> None:
        if isinstance(value, dict):
            for key, item in value.items():
                _add(f"{prefix}[{key}]", item)
        elif isinstance(value, list):
            for index, item in enumerate(value):
                _add(f"{prefix}[{index}]", item)
        else:
            pairs.append((prefix, str(value)))

    for key, value in data.items():
        if isinstance(value, (dict, list)):
            _add(key, value)
        else:
            pairs.append((key, str(value)))

    return pairs


# ═══════════════════════════════════════════════════════════════════════════════
# GATEWAY
# ═══════════════════════════════════════════════════════════════════════════════


class ProdamusGateway:
    """
    Builds signed payment links and verifies webhook notifications.
    """

    def __init__(self, url: Optional[str] = None, secret_key: Optional[str] = None):
        self.url = url if url is not None else settings.PRODAMUS_URL
        self.secret_key = secret_key if secret_key is not None else settings.PRODAMUS_SECRET_KEY

    def _require_secret(self) -> str:
        if not self.secret_key:
            raise ConfigurationError("PRODAMUS_SECRET_KEY")
        return self.secret_key

    def sign(self, data: dict[str, Any]) -> str:
        """
        Compute the HMAC-SHA256 signature of a payload.

        The "signature" key, if present, is excluded.
        """
        unsigned = {key: value for key, value in data.items() if key != "signature"}
        message = json.dumps(
            sort_recursive(unsigned),
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return hmac.new(
            self._require_secret().encode("utf-8"),
            message.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def verify(self, data: dict[str, Any], signature: Optional[str]) -> bool:
        """Check a received signature in constant time."""
        if not signature:
            return False
        expected = self.sign(data).encode("utf-8")
        return hmac.compare_digest(expected, signature.strip().lower().encode("utf-8"))

    def build_payment_data(
        self,
        *,
        order_id: str,
        customer_email: str,
        plan_type: PlanType,
        user_id: str,
        base_url: str,
        customer_phone: Optional[str] = None,
    ) -> dict[str, Any]:
        """Assemble the unsigned payment request."""
        price = settings.PRICE_YEARLY if plan_type == PlanType.YEARLY else settings.PRICE_MONTHLY
        base_url = base_url.rstrip("/")

        data: dict[str, Any] = {
            "order_id": order_id,
            "customer_email": customer_email,
            "products": [
                {
                    "name": PRODUCT_NAMES[plan_type],
                    "price": price,
                    "quantity": "1",
                    "sum": price,
                }
            ],
            "do": "link",
            "urlReturn": f"{base_url}/pricing",
            "urlSuccess": f"{base_url}/pricing?payment=success",
            "urlNotification": f"{base_url}/api/payments/webhook",
            "_param_user_id": user_id,
            "_param_plan_type": plan_type.value,
        }
        if customer_phone:
            data["customer_phone"] = customer_phone
        return data

    def create_payment_link(self, **kwargs: Any) -> str:
        """
        Build a signed payment link.

        Accepts the keyword arguments of build_payment_data().

        Raises:
            ConfigurationError: If PRODAMUS_URL or PRODAMUS_SECRET_KEY is missing
        """
        if not self.url:
            raise ConfigurationError("PRODAMUS_URL")

        data = self.build_payment_data(**kwargs)
        data["signature"] = self.sign(data)

        return f"{self.url}?{urlencode(flatten_query(data))}"

    # ═══════════════════════════════════════════════════════════════════════════
    # WEBHOOK PARSING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def extract_param(body: dict[str, Any], name: str) -> Optional[str]:
        """
        Find a custom parameter wherever Prodamus put it.

        Search order: top level, customer_extra, first product, any nested dict.
        """
        if body.get(name):
            return body[name]

        extra = body.get("customer_extra")
        if isinstance(extra, dict) and extra.get(name):
            return extra[name]

        products = body.get("products")
        if isinstance(products, list) and products and isinstance(products[0], dict):
            if products[0].get(name):
                return products[0][name]

        for value in body.values():
            if isinstance(value, dict) and value.get(name):
                return value[name]

        return None

    @classmethod
    def parse_webhook(cls, body: dict[str, Any]) -> WebhookPayload:
        """Normalize a webhook body into a WebhookPayload."""
        products = body.get("products")
        first_price = None
        if isinstance(products, list) and products and isinstance(products[0], dict):
            first_price = products[0].get("price")

        order_id = body.get("order_id") or body.get("order_num")
        order_num = body.get("order_num")

        return WebhookPayload(
            order_id=str(order_id) if order_id else "",
            order_num=str(order_num) if order_num else None,
            payment_status=body.get("payment_status") or "pending",
            payment_status_description=body.get("payment_status_description"),
            sum=str(body.get("sum") or first_price or "0"),
            customer_email=body.get("customer_email"),
            customer_phone=body.get("customer_phone"),
            user_id=cls.extract_param(body, "_param_user_id"),
            plan_type=cls.extract_param(body, "_param_plan_type"),
            signature=body.get("signature"),
            date=body.get("date"),
        )


def get_payment_gateway() -> ProdamusGateway:
    """Create a gateway bound to current settings."""
    return ProdamusGateway()
