"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services are stateless (only hold db session reference)
- Each request gets its own db session
- No shared state between requests

External clients (LLM, email, payment gateway) are process-wide singletons
exposed through their own dependencies so tests can override them:

    app.dependency_overrides[get_llm] = lambda: FakeLLM()

Usage:
======
    from esoteric_planner.api.dependencies.services import get_strategy_service

    @router.get("/strategies")
    async def list_strategies(
        current_user: CurrentUser,
        service: StrategyService = Depends(get_strategy_service),
    ):
        return await service.list_strategies(current_user)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.api.dependencies.database import get_db
from esoteric_planner.shared.adapters.email_adapter import EmailAdapter, get_email_adapter
from esoteric_planner.shared.adapters.llm_adapter import LLMAdapter, get_llm_adapter
from esoteric_planner.shared.adapters.payment_gateway import ProdamusGateway, get_payment_gateway
from esoteric_planner.shared.services.access_service import AccessService
from esoteric_planner.shared.services.admin_service import AdminService
from esoteric_planner.shared.services.auth_service import AuthService
from esoteric_planner.shared.services.content_generator import ContentGenerator
from esoteric_planner.shared.services.library_service import (
    ArchetypeService,
    CaseStudyService,
    VoicePostService,
)
from esoteric_planner.shared.services.payment_service import PaymentService
from esoteric_planner.shared.services.promocode_service import PromocodeService
from esoteric_planner.shared.services.strategy_service import StrategyService
from esoteric_planner.shared.services.trainer_service import TrainerService


# ═══════════════════════════════════════════════════════════════════════════════
# EXTERNAL CLIENTS
# ═══════════════════════════════════════════════════════════════════════════════

def get_llm() -> LLMAdapter:
    return get_llm_adapter()


def get_email() -> EmailAdapter:
    return get_email_adapter()


def get_gateway() -> ProdamusGateway:
    return get_payment_gateway()


def get_content_generator(llm: LLMAdapter = Depends(get_llm)) -> ContentGenerator:
    return ContentGenerator(llm)


# ═══════════════════════════════════════════════════════════════════════════════
# SERVICES
# ═══════════════════════════════════════════════════════════════════════════════

async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    email: EmailAdapter = Depends(get_email),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db, email)


async def get_access_service(
    db: AsyncSession = Depends(get_db),
) -> AccessService:
    return AccessService(db)


async def get_strategy_service(
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_content_generator),
) -> StrategyService:
    return StrategyService(db, generator)


async def get_archetype_service(
    db: AsyncSession = Depends(get_db),
) -> ArchetypeService:
    return ArchetypeService(db)


async def get_voice_post_service(
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_content_generator),
) -> VoicePostService:
    return VoicePostService(db, generator)


async def get_case_study_service(
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_content_generator),
) -> CaseStudyService:
    return CaseStudyService(db, generator)


async def get_trainer_service(
    db: AsyncSession = Depends(get_db),
    generator: ContentGenerator = Depends(get_content_generator),
) -> TrainerService:
    return TrainerService(db, generator)


async def get_admin_service(
    db: AsyncSession = Depends(get_db),
) -> AdminService:
    return AdminService(db)


async def get_promocode_service(
    db: AsyncSession = Depends(get_db),
) -> PromocodeService:
    return PromocodeService(db)


async def get_payment_service(
    db: AsyncSession = Depends(get_db),
    gateway: ProdamusGateway = Depends(get_gateway),
) -> PaymentService:
    """
    Dependency to get PaymentService instance.
    """
    return PaymentService(db, gateway)
