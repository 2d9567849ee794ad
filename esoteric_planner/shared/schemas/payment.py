"""
Payment Schemas

Request/response models for the payment gateway endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field

from esoteric_planner.shared.models.enums import PlanType
from esoteric_planner.shared.schemas.common import EntityResponse


class PaymentCreateRequest(BaseModel):
    plan_type: PlanType
    phone: Optional[str] = Field(default=None, max_length=32)


class PaymentCreateResponse(BaseModel):
    payment_url: str
    order_id: str


class PaymentResponse(EntityResponse):
    order_id: str
    amount: str
    plan_type: str
    status: str


class WebhookAckResponse(BaseModel):
    status: str = "ok"
