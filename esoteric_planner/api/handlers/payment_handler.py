"""
Payment Handler

Subscription purchases via Prodamus.

Endpoints:
==========
    POST /api/payments/create    → Signed payment link for a plan
    POST /api/payments/webhook   → Gateway notification (no auth, HMAC-signed)
    GET  /api/payments/history   → User's payments

Webhook Body:
=============
The gateway posts form-encoded data with bracketed keys
(products[0][price]=990.00); JSON bodies are accepted too. Both are
normalized to a nested dict before the signature is checked.
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, Request

from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_payment_service
from esoteric_planner.shared.adapters.payment_gateway import unflatten_form
from esoteric_planner.shared.core.exceptions import ValidationError
from esoteric_planner.shared.schemas.payment import (
    PaymentCreateRequest,
    PaymentCreateResponse,
    PaymentResponse,
    WebhookAckResponse,
)
from esoteric_planner.shared.services.payment_service import PaymentService


router = APIRouter()


@router.post("/create", response_model=PaymentCreateResponse)
async def create_payment(
    data: PaymentCreateRequest,
    current_user: CurrentUser,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Raises:
        503: Payment gateway not configured
    """
    payment_url, payment = await service.create_payment(
        current_user,
        data.plan_type,
        phone=data.phone,
    )
    return PaymentCreateResponse(payment_url=payment_url, order_id=payment.order_id)


async def read_webhook_body(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except json.JSONDecodeError as e:
            raise ValidationError("Webhook body is not valid JSON") from e
        if not isinstance(body, dict):
            raise ValidationError("Webhook body must be an object")
        return body

    form = await request.form()
    return unflatten_form({key: value for key, value in form.items() if isinstance(value, str)})


@router.post("/webhook", response_model=WebhookAckResponse)
async def payment_webhook(
    request: Request,
    sign: Optional[str] = Header(default=None, alias="Sign"),
    service: PaymentService = Depends(get_payment_service),
):
    """
    Apply a gateway notification.

    Raises:
        401: Missing or invalid signature
        400: Order, user or plan cannot be determined
    """
    body = await read_webhook_body(request)
    await service.handle_webhook(body, sign)
    return WebhookAckResponse()


@router.get("/history", response_model=list[PaymentResponse])
async def payment_history(
    current_user: CurrentUser,
    service: PaymentService = Depends(get_payment_service),
):
    return await service.list_payments(current_user)
