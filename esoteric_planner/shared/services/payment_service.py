"""
Payment Service

Subscription purchases through the Prodamus gateway.

Flow:
=====
    1. POST /api/payments/create
         → pending Payment row, signed payment link returned to the client
    2. User pays on the gateway page
    3. POST /api/payments/webhook (gateway → us)
         → signature verified, Payment updated
         → on success: access extended by 30 (monthly) or 365 (yearly) days

Idempotency:
============
The gateway may deliver the same notification more than once. An order
already marked success is acknowledged without extending access again.
"""

from typing import Any, Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.config.settings import settings
from esoteric_planner.shared.adapters.payment_gateway import ProdamusGateway, WebhookPayload
from esoteric_planner.shared.core.exceptions import (
    AuthenticationError,
    UserNotFoundError,
    ValidationError,
)
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.base import utcnow
from esoteric_planner.shared.models.enums import PaymentStatus, PlanType, SubscriptionTier
from esoteric_planner.shared.models.payment import Payment
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.payment_repository import PaymentRepository
from esoteric_planner.shared.repositories.user_repository import UserRepository
from esoteric_planner.shared.services.access_service import AccessService

logger = get_logger(__name__)

PLAN_DAYS = {
    PlanType.MONTHLY: settings.MONTHLY_PLAN_DAYS,
    PlanType.YEARLY: settings.YEARLY_PLAN_DAYS,
}

FAILED_STATUSES = {"failed", "order_canceled", "order_denied"}


def normalize_status(status: str) -> PaymentStatus:
    """Map gateway statuses onto ours. Anything unknown stays pending."""
    status = (status or "").strip().lower()
    if status == PaymentStatus.SUCCESS.value:
        return PaymentStatus.SUCCESS
    if status in FAILED_STATUSES:
        return PaymentStatus.FAILED
    return PaymentStatus.PENDING


def new_order_id() -> str:
    return f"ORD-{utcnow():%Y%m%d%H%M%S}-{uuid.uuid4().hex[:8].upper()}"


class PaymentService:
    """
    Service for payment business logic.

    Attributes:
        repo: PaymentRepository instance
        users: UserRepository instance
        access: AccessService for extending access
        gateway: ProdamusGateway instance
    """

    def __init__(self, session: AsyncSession, gateway: Optional[ProdamusGateway] = None) -> None:
        self.session = session
        self.repo = PaymentRepository(session)
        self.users = UserRepository(session)
        self.access = AccessService(session)
        self.gateway = gateway or ProdamusGateway()

    async def create_payment(
        self,
        user: User,
        plan_type: PlanType,
        phone: Optional[str] = None,
    ) -> tuple[str, Payment]:
        """
        Record a pending payment and build its payment link.

        Returns:
            Tuple of (payment_url, payment)

        Raises:
            ConfigurationError: If the gateway is not configured
        """
        plan_type = PlanType(plan_type)
        order_id = new_order_id()

        payment_url = self.gateway.create_payment_link(
            order_id=order_id,
            customer_email=user.email,
            plan_type=plan_type,
            user_id=str(user.id),
            base_url=settings.APP_URL,
            customer_phone=phone,
        )

        amount = settings.PRICE_YEARLY if plan_type == PlanType.YEARLY else settings.PRICE_MONTHLY
        payment = await self.repo.create(
            user_id=user.id,
            order_id=order_id,
            amount=amount,
            plan_type=plan_type.value,
            status=PaymentStatus.PENDING.value,
        )

        logger.info(
            "Payment created",
            user_id=str(user.id),
            order_id=order_id,
            plan_type=plan_type.value,
        )
        return payment_url, payment

    async def list_payments(self, user: User) -> list[Payment]:
        return await self.repo.list_for_user(user.id)

    # ═══════════════════════════════════════════════════════════════════════════
    # WEBHOOK
    # ═══════════════════════════════════════════════════════════════════════════

    async def handle_webhook(self, body: dict[str, Any], signature: Optional[str]) -> Payment:
        """
        Verify and apply a gateway notification.

        Args:
            body: Unflattened webhook body
            signature: Value of the Sign header or of the body's signature field

        Raises:
            AuthenticationError: If the signature is missing or invalid
            ValidationError: If the order, user or plan cannot be determined
        """
        signature = signature or body.get("signature")
        if not self.gateway.verify(body, signature):
            logger.warning("Webhook signature rejected", order_id=body.get("order_id"))
            raise AuthenticationError("Invalid webhook signature")

        payload = self.gateway.parse_webhook(body)
        if not payload.order_id:
            raise ValidationError("Webhook without order_id")

        status = normalize_status(payload.payment_status)
        payment = await self.repo.get_by_order_id(payload.order_id, for_update=True)

        if payment is not None and payment.status == PaymentStatus.SUCCESS.value:
            logger.info("Webhook for completed order ignored", order_id=payload.order_id)
            return payment

        user_id = payment.user_id if payment is not None else self._parse_user_id(payload)
        plan_type = self._parse_plan_type(payment.plan_type if payment is not None else payload.plan_type)

        user = await self.users.get(user_id, for_update=True)
        if user is None:
            raise UserNotFoundError(str(user_id))

        if payment is None:
            payment = await self.repo.create(
                user_id=user_id,
                order_id=payload.order_id,
                amount=payload.sum,
                plan_type=plan_type.value,
                status=status.value,
                provider_data=body,
            )
        else:
            payment = await self.repo.apply(payment, status=status.value, provider_data=body)

        logger.info(
            "Webhook applied",
            order_id=payload.order_id,
            status=status.value,
            user_id=str(user_id),
        )

        if status == PaymentStatus.SUCCESS:
            await self.access.extend_access(
                user,
                PLAN_DAYS[plan_type],
                SubscriptionTier(plan_type.value),
            )

        return payment

    @staticmethod
    def _parse_user_id(payload: WebhookPayload) -> uuid.UUID:
        try:
            return uuid.UUID(str(payload.user_id))
        except ValueError as e:
            raise ValidationError("Webhook without a valid _param_user_id") from e

    @staticmethod
    def _parse_plan_type(value: Optional[str]) -> PlanType:
        try:
            return PlanType(value)
        except ValueError as e:
            raise ValidationError("Webhook without a valid _param_plan_type") from e
