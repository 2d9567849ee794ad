"""
Authentication Service

Business logic for registration, login, password reset and profile updates.

Registration Flow:
==================
    1. Reject a taken email (409)
    2. Generate a random 12-character password, store its bcrypt hash
    3. Start the trial: trial_ends_at = now + TRIAL_DAYS
    4. Email the password (a failed email is logged, registration still succeeds)

Password Reset Flow:
====================
    request(email)
        → token = 32 random bytes (hex), bcrypt hash stored, expires in 1 hour
        → email {APP_URL}/reset-password?token=...&email=...
    confirm(email, token, new_password)
        → newest unexpired unused token of the user, bcrypt comparison
        → new password hash, token marked used

Usage:
======
    from esoteric_planner.shared.services.auth_service import AuthService

    service = AuthService(db, email_adapter)
    user = await service.register_user("reader@example.com")
    user, token, expires = await service.login_user(email, password)
"""

from datetime import timedelta
from typing import Optional, Tuple
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from esoteric_planner.config.settings import settings
from esoteric_planner.shared.adapters.email_adapter import EmailAdapter
from esoteric_planner.shared.core.exceptions import (
    AuthenticationError,
    DuplicateResourceError,
    ValidationError,
)
from esoteric_planner.shared.core.logging import get_logger
from esoteric_planner.shared.models.base import utcnow
from esoteric_planner.shared.models.enums import SubscriptionTier
from esoteric_planner.shared.models.user import User
from esoteric_planner.shared.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from esoteric_planner.shared.repositories.user_repository import UserRepository
from esoteric_planner.shared.utils.security import SecurityUtils

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Неверный email или пароль"
INVALID_RESET_TOKEN = "Недействительная или просроченная ссылка для сброса пароля"


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - User registration with a generated password
    - User authentication (login) and JWT generation
    - Password reset and password change
    - Profile updates

    Attributes:
        session: Database session
        repo: UserRepository instance
        reset_tokens: PasswordResetTokenRepository instance
        email: Email adapter used for welcome and reset emails
    """

    def __init__(self, session: AsyncSession, email: Optional[EmailAdapter] = None) -> None:
        """
        Initialize AuthService.

        Args:
            session: Async database session
            email: Email adapter (only needed for registration and reset requests)
        """
        self.session = session
        self.repo = UserRepository(session)
        self.reset_tokens = PasswordResetTokenRepository(session)
        self.email = email

    @staticmethod
    def create_token(user: User) -> Tuple[str, int]:
        """
        Issue a JWT for the user.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    # ═══════════════════════════════════════════════════════════════════════════
    # REGISTRATION & LOGIN
    # ═══════════════════════════════════════════════════════════════════════════

    async def register_user(
        self,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """
        Register a new user on the trial tier and email them a password.

        Raises:
            DuplicateResourceError: If email already registered
        """
        email = email.strip().lower()
        if await self.repo.email_exists(email):
            raise DuplicateResourceError("Пользователь с таким email уже существует")

        password = SecurityUtils.generate_password()

        user = await self.repo.create(
            email=email,
            password_hash=SecurityUtils.hash_password(password),
            first_name=first_name,
            last_name=last_name,
            subscription_tier=SubscriptionTier.TRIAL.value,
            trial_ends_at=utcnow() + timedelta(days=settings.TRIAL_DAYS),
            generations_limit=settings.FREE_GENERATIONS_LIMIT,
        )
        logger.info("User registered", user_id=str(user.id))

        sent = False
        if self.email is not None:
            sent = await self.email.send_welcome_email(email, password)
        if not sent:
            logger.warning("Welcome email not sent", user_id=str(user.id))

        return user

    async def login_user(self, email: str, password: str) -> Tuple[User, str, int]:
        """
        Authenticate user and generate token.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = await self.repo.apply(user, last_login_at=utcnow())
        access_token, expires_in = self.create_token(user)

        logger.info("User logged in", user_id=str(user.id))
        return user, access_token, expires_in

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORDS
    # ═══════════════════════════════════════════════════════════════════════════

    async def request_password_reset(self, email: str) -> None:
        """
        Create a reset token and email the link.

        Unknown emails are ignored silently, so the response never reveals
        whether an account exists.
        """
        user = await self.repo.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = SecurityUtils.generate_reset_token()
        await self.reset_tokens.create(
            user_id=user.id,
            token_hash=SecurityUtils.hash_password(token),
            expires_at=utcnow() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES),
        )

        query = urlencode({"token": token, "email": user.email})
        reset_link = f"{settings.APP_URL.rstrip('/')}/reset-password?{query}"

        sent = False
        if self.email is not None:
            sent = await self.email.send_password_reset_email(user.email, reset_link)
        logger.info("Password reset requested", user_id=str(user.id), email_sent=sent)

    async def confirm_password_reset(self, email: str, token: str, new_password: str) -> None:
        """
        Set a new password using a reset token.

        Raises:
            ValidationError: If the user, token or expiry does not match
        """
        user = await self.repo.get_by_email(email)
        if user is None:
            raise ValidationError(INVALID_RESET_TOKEN)

        now = utcnow()
        reset_token = await self.reset_tokens.get_latest_valid(user.id, now)
        if reset_token is None or not SecurityUtils.verify_password(token, reset_token.token_hash):
            raise ValidationError(INVALID_RESET_TOKEN)

        await self.repo.apply(user, password_hash=SecurityUtils.hash_password(new_password))
        await self.reset_tokens.apply(reset_token, used_at=now)

        logger.info("Password reset completed", user_id=str(user.id))

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """
        Change the password of a logged-in user.

        Raises:
            ValidationError: If the current password is wrong
        """
        if not SecurityUtils.verify_password(current_password, user.password_hash):
            raise ValidationError("Неверный текущий пароль")

        await self.repo.apply(user, password_hash=SecurityUtils.hash_password(new_password))
        logger.info("Password changed", user_id=str(user.id))

    async def update_profile(self, user: User, nickname: Optional[str]) -> User:
        nickname = nickname.strip() if nickname else None
        return await self.repo.apply(user, nickname=nickname or None)
