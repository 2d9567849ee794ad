"""
Shared Module

Everything below the HTTP layer:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: DeepSeek, Rusender, Prodamus

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic, prompts
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External services
    ├── migrations/     ← Alembic environment and revisions
    └── utils/          ← Security, JSON repair, text helpers

Usage:
======
    from esoteric_planner.shared.models import User, ContentStrategy
    from esoteric_planner.shared.repositories import UserRepository
    from esoteric_planner.shared.services import AuthService
    from esoteric_planner.shared.core import logger, PlannerException
"""
