from datetime import date, timedelta

import pytest

from esoteric_planner.shared.core.exceptions import GenerationLimitError, ValidationError
from esoteric_planner.shared.models import User, utcnow
from esoteric_planner.shared.models.base import as_utc
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.services.access_service import (
    FREE_LIMIT_REASON,
    TRIAL_OVER_REASON,
    AccessService,
    can_generate,
    has_active_access,
)


def build_user(**fields) -> User:
    values = {
        "email": "someone@example.com",
        "subscription_tier": SubscriptionTier.TRIAL.value,
        "is_admin": False,
        "generations_used": 0,
        "generations_limit": 50,
    }
    values.update(fields)
    return User(**values)


class TestHasActiveAccess:
    def test_admin_has_unlimited_access(self):
        status = has_active_access(build_user(is_admin=True))
        assert status.has_access
        assert status.days_left == -1

    def test_active_paid_subscription(self):
        now = utcnow()
        user = build_user(
            subscription_tier=SubscriptionTier.MONTHLY.value,
            subscription_expires_at=now + timedelta(days=10, hours=1),
        )
        status = has_active_access(user, now=now)
        assert status.has_access
        assert status.days_left == 11

    def test_expired_paid_falls_back_to_trial(self):
        now = utcnow()
        user = build_user(
            subscription_tier=SubscriptionTier.YEARLY.value,
            subscription_expires_at=now - timedelta(days=1),
            trial_ends_at=now + timedelta(days=2),
        )
        status = has_active_access(user, now=now)
        assert status.has_access
        assert status.days_left == 2

    def test_expired_trial_has_no_access(self):
        now = utcnow()
        status = has_active_access(build_user(trial_ends_at=now - timedelta(seconds=1)), now=now)
        assert not status.has_access
        assert status.reason == TRIAL_OVER_REASON


class TestCanGenerate:
    def test_active_trial_is_unlimited(self):
        user = build_user(trial_ends_at=utcnow() + timedelta(days=1))
        allowance = can_generate(user)
        assert allowance.allowed
        assert allowance.remaining == -1

    def test_free_tier_counts_remaining(self):
        user = build_user(
            subscription_tier=SubscriptionTier.FREE.value,
            generations_used=48,
            generations_limit=50,
        )
        allowance = can_generate(user)
        assert allowance.allowed
        assert allowance.remaining == 2

    def test_free_tier_exhausted(self):
        user = build_user(
            subscription_tier=SubscriptionTier.FREE.value,
            generations_used=50,
            generations_limit=50,
        )
        allowance = can_generate(user)
        assert not allowance.allowed
        assert allowance.reason == FREE_LIMIT_REASON

    def test_expired_trial_is_rejected(self):
        allowance = can_generate(build_user(trial_ends_at=utcnow() - timedelta(days=1)))
        assert not allowance.allowed
        assert allowance.remaining == 0
        assert allowance.reason == TRIAL_OVER_REASON


class TestAccessServiceGates:
    async def test_ensure_can_generate_raises_limit_error(self, db_session):
        service = AccessService(db_session)
        with pytest.raises(GenerationLimitError) as exc_info:
            await service.ensure_can_generate(build_user(trial_ends_at=utcnow() - timedelta(days=1)))
        assert exc_info.value.status_code == 403
        assert exc_info.value.details["limit_reached"] is True

    async def test_free_tier_may_always_expand(self, db_session):
        service = AccessService(db_session)
        user = build_user(
            subscription_tier=SubscriptionTier.FREE.value,
            generations_used=50,
            generations_limit=50,
        )
        await service.ensure_can_expand(user)

    async def test_expired_trial_may_not_expand(self, db_session):
        service = AccessService(db_session)
        with pytest.raises(GenerationLimitError):
            await service.ensure_can_expand(build_user(trial_ends_at=utcnow() - timedelta(days=1)))


class TestAccessServiceWrites:
    @pytest.fixture
    async def stored_user(self, db_session) -> User:
        user = build_user(trial_ends_at=utcnow() + timedelta(days=3))
        db_session.add(user)
        await db_session.flush()
        return user

    async def test_record_generation_counts_per_day(self, db_session, stored_user):
        service = AccessService(db_session)

        await service.record_generation(stored_user, today=date(2026, 10, 17))
        await service.record_generation(stored_user, today=date(2026, 10, 17))
        assert stored_user.daily_generations_used == 2

        user = await service.record_generation(stored_user, today=date(2026, 10, 18))
        assert user.generations_used == 3
        assert user.daily_generations_used == 1
        assert user.last_generation_date == "2026-10-18"

    async def test_extend_paid_subscription_from_now(self, db_session, stored_user):
        service = AccessService(db_session)
        before = utcnow()

        user = await service.extend_access(stored_user, 30, SubscriptionTier.MONTHLY)

        assert user.subscription_tier == "monthly"
        expires_at = as_utc(user.subscription_expires_at)
        assert before + timedelta(days=30) <= expires_at <= utcnow() + timedelta(days=30)

    async def test_extend_running_subscription_adds_to_expiry(self, db_session, stored_user):
        service = AccessService(db_session)
        await service.extend_access(stored_user, 30, SubscriptionTier.MONTHLY)
        first_expiry = as_utc(stored_user.subscription_expires_at)

        user = await service.extend_access(stored_user, 365, SubscriptionTier.YEARLY)

        assert user.subscription_tier == "yearly"
        assert as_utc(user.subscription_expires_at) == first_expiry + timedelta(days=365)

    async def test_extend_without_tier_extends_trial(self, db_session, stored_user):
        service = AccessService(db_session)
        trial_end = as_utc(stored_user.trial_ends_at)

        user = await service.extend_access(stored_user, 7)

        assert user.subscription_tier == "trial"
        assert as_utc(user.trial_ends_at) == trial_end + timedelta(days=7)

    async def test_extend_rejects_non_positive_days(self, db_session, stored_user):
        with pytest.raises(ValidationError):
            await AccessService(db_session).extend_access(stored_user, 0)
