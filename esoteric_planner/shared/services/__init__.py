"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ ContentGenerator → LLMAdapter
                ↘ EmailAdapter / ProdamusGateway

Services should:
- Contain business logic and validation
- Coordinate multiple repositories if needed
- Handle transactions (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Registration, login, password reset, profile
- AccessService: Access status, generation limits, access extension
- StrategyService: Content plans and the generation pipeline
- ArchetypeService / VoicePostService / CaseStudyService: Saved library
- TrainerService: Money trainer
- AdminService: Dashboard, user management
- PromocodeService: Promocode activation and management
- PaymentService: Payment links and gateway webhooks
- ContentGenerator: Prompt → LLM → parsed result

Usage:
======
    from esoteric_planner.shared.services import AuthService

    service = AuthService(db, email_adapter)
    user = await service.register_user("reader@example.com")
"""

from esoteric_planner.shared.services.auth_service import AuthService
from esoteric_planner.shared.services.access_service import AccessService
from esoteric_planner.shared.services.content_generator import ContentGenerator
from esoteric_planner.shared.services.strategy_service import StrategyService
from esoteric_planner.shared.services.library_service import (
    ArchetypeService,
    VoicePostService,
    CaseStudyService,
)
from esoteric_planner.shared.services.trainer_service import TrainerService
from esoteric_planner.shared.services.admin_service import AdminService
from esoteric_planner.shared.services.promocode_service import PromocodeService
from esoteric_planner.shared.services.payment_service import PaymentService

__all__ = [
    "AuthService",
    "AccessService",
    "ContentGenerator",
    "StrategyService",
    "ArchetypeService",
    "VoicePostService",
    "CaseStudyService",
    "TrainerService",
    "AdminService",
    "PromocodeService",
    "PaymentService",
]
