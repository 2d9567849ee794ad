"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]                ← Generic CRUD operations
         │
         ├── UserRepository                  ← Lookup by email, admin statistics
         ├── PromocodeRepository             ← Codes and usages
         ├── SalesTrainerSampleRepository    ← Global few-shot samples
         │
         └── OwnedRepository[ModelType]      ← Owner-scoped get/list/delete
                  ├── ContentStrategyRepository
                  ├── ArchetypeResultRepository
                  ├── VoicePostRepository
                  ├── CaseStudyRepository
                  ├── SalesTrainerSessionRepository
                  ├── PasswordResetTokenRepository
                  └── PaymentRepository
"""

from esoteric_planner.shared.repositories.base import BaseRepository, OwnedRepository
from esoteric_planner.shared.repositories.user_repository import UserRepository
from esoteric_planner.shared.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from esoteric_planner.shared.repositories.content_repository import (
    ContentStrategyRepository,
    ArchetypeResultRepository,
    VoicePostRepository,
    CaseStudyRepository,
)
from esoteric_planner.shared.repositories.trainer_repository import (
    SalesTrainerSampleRepository,
    SalesTrainerSessionRepository,
)
from esoteric_planner.shared.repositories.promocode_repository import PromocodeRepository
from esoteric_planner.shared.repositories.payment_repository import PaymentRepository

__all__ = [
    "BaseRepository",
    "OwnedRepository",
    "UserRepository",
    "PasswordResetTokenRepository",
    "ContentStrategyRepository",
    "ArchetypeResultRepository",
    "VoicePostRepository",
    "CaseStudyRepository",
    "SalesTrainerSampleRepository",
    "SalesTrainerSessionRepository",
    "PromocodeRepository",
    "PaymentRepository",
]
