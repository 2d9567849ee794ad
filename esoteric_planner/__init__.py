"""
Esoteric Planner Backend

Subscription service that helps esoteric practitioners (tarot readers,
astrologers, numerologists) plan and write social media content.

Package Structure:
==================
    esoteric_planner/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, adapters, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn esoteric_planner.api.main:app --reload

    # Migrations
    alembic upgrade head
"""
