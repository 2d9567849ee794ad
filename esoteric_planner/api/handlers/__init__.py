"""
API Handlers

Route handlers for the Esoteric Planner API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from esoteric_planner.api.handlers import (
    admin_handler,
    archetype_handler,
    auth_handler,
    case_study_handler,
    generation_limit_handler,
    health_handler,
    payment_handler,
    promocode_handler,
    strategy_handler,
    trainer_handler,
    voice_post_handler,
)

__all__ = [
    "admin_handler",
    "archetype_handler",
    "auth_handler",
    "case_study_handler",
    "generation_limit_handler",
    "health_handler",
    "payment_handler",
    "promocode_handler",
    "strategy_handler",
    "trainer_handler",
    "voice_post_handler",
]
