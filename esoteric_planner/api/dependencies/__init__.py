"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, AdminUser
- External clients: get_llm(), get_email(), get_gateway()
- Services: get_*_service() functions

Type Aliases:
=============
Type aliases provide cleaner route signatures:

    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):
"""

from esoteric_planner.api.dependencies.database import (
    get_db,
    DbSession,
)
from esoteric_planner.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    get_current_admin,
    CurrentUser,
    AdminUser,
)
from esoteric_planner.api.dependencies.services import (
    get_llm,
    get_email,
    get_gateway,
    get_content_generator,
    get_auth_service,
    get_access_service,
    get_strategy_service,
    get_archetype_service,
    get_voice_post_service,
    get_case_study_service,
    get_trainer_service,
    get_admin_service,
    get_promocode_service,
    get_payment_service,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "get_current_admin",
    "CurrentUser",
    "AdminUser",
    # External clients
    "get_llm",
    "get_email",
    "get_gateway",
    "get_content_generator",
    # Services
    "get_auth_service",
    "get_access_service",
    "get_strategy_service",
    "get_archetype_service",
    "get_voice_post_service",
    "get_case_study_service",
    "get_trainer_service",
    "get_admin_service",
    "get_promocode_service",
    "get_payment_service",
]
