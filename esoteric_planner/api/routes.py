"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live      → Health check endpoints
    /api/auth                   → Registration, login, passwords, profile
    /api/generation-limit       → Remaining generations
    /api/strategies             → Content plans + generation pipeline
    /api/archetypes             → Archetype quiz results
    /api/voice-posts            → Voice posts
    /api/cases                  → Case studies
    /api/trainer                → Money trainer
    /api/promocodes             → Promocode activation
    /api/payments               → Prodamus payments + webhook
    /api/admin                  → Admin panel

Usage:
======
    from esoteric_planner.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

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

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix=f"{API_PREFIX}/auth",
        tags=["Authentication"],
    )

    app.include_router(
        generation_limit_handler.router,
        prefix=f"{API_PREFIX}/generation-limit",
        tags=["Access"],
    )

    # Content plans
    app.include_router(
        strategy_handler.router,
        prefix=f"{API_PREFIX}/strategies",
        tags=["Strategies"],
    )

    # Library
    app.include_router(
        archetype_handler.router,
        prefix=f"{API_PREFIX}/archetypes",
        tags=["Archetypes"],
    )
    app.include_router(
        voice_post_handler.router,
        prefix=f"{API_PREFIX}/voice-posts",
        tags=["Voice Posts"],
    )
    app.include_router(
        case_study_handler.router,
        prefix=f"{API_PREFIX}/cases",
        tags=["Cases"],
    )

    app.include_router(
        trainer_handler.router,
        prefix=f"{API_PREFIX}/trainer",
        tags=["Trainer"],
    )

    # Billing
    app.include_router(
        promocode_handler.router,
        prefix=f"{API_PREFIX}/promocodes",
        tags=["Promocodes"],
    )
    app.include_router(
        payment_handler.router,
        prefix=f"{API_PREFIX}/payments",
        tags=["Payments"],
    )

    # Admin panel
    app.include_router(
        admin_handler.router,
        prefix=f"{API_PREFIX}/admin",
        tags=["Admin"],
    )
