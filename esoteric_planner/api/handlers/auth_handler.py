"""
Authentication Handler

Handles registration, login, password management and the user profile.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses (status codes, the auth cookie)

Business logic belongs in the SERVICE layer, not here. Domain exceptions
raised by services are turned into JSON errors by the global handlers.

SESSION:
========
Login returns the JWT in the body and also sets it as an httponly cookie,
so both API clients (Authorization: Bearer) and the browser app work.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from esoteric_planner.config.settings import settings
from esoteric_planner.api.dependencies.auth import CurrentUser
from esoteric_planner.api.dependencies.services import get_access_service, get_auth_service
from esoteric_planner.shared.schemas.common import MessageResponse
from esoteric_planner.shared.schemas.user import (
    AccessStatusResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
    UpdateProfileRequest,
    UserResponse,
)
from esoteric_planner.shared.services.access_service import AccessService
from esoteric_planner.shared.services.auth_service import AuthService


router = APIRouter()

PASSWORD_RESET_SENT = "Если такой email зарегистрирован, мы отправили ссылку для сброса пароля"


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    The password is generated server-side and sent by email.

    Raises:
        400: Invalid email
        409: Email already registered
    """
    user = await auth_service.register_user(
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    return RegisterResponse(
        message="Регистрация успешна. Пароль отправлен на вашу почту",
        user_id=user.id,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user, return the JWT and set the auth cookie.

    Raises:
        401: If credentials are invalid
    """
    user, access_token, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=access_token,
        max_age=expires_in,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
    )

    return LoginResponse(
        message="Вход выполнен",
        access_token=access_token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return MessageResponse(message="Выход выполнен")


# ═══════════════════════════════════════════════════════════════════════════════
# PASSWORDS
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/password-reset/request", response_model=MessageResponse)
async def request_password_reset(
    data: PasswordResetRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Send a reset link.

    Always answers with the same message, whether or not the email exists.
    """
    await auth_service.request_password_reset(data.email)
    return MessageResponse(message=PASSWORD_RESET_SENT)


@router.post("/password-reset/confirm", response_model=MessageResponse)
async def confirm_password_reset(
    data: PasswordResetConfirm,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.confirm_password_reset(data.email, data.token, data.new_password)
    return MessageResponse(message="Пароль успешно изменён")


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.change_password(current_user, data.current_password, data.new_password)
    return MessageResponse(message="Пароль успешно изменён")


# ═══════════════════════════════════════════════════════════════════════════════
# PROFILE
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/user", response_model=UserResponse)
async def get_user(current_user: CurrentUser):
    return UserResponse.model_validate(current_user)


@router.patch("/user", response_model=UserResponse)
async def update_user(
    data: UpdateProfileRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = await auth_service.update_profile(current_user, data.nickname)
    return UserResponse.model_validate(user)


@router.get("/access", response_model=AccessStatusResponse)
async def get_access(
    current_user: CurrentUser,
    access_service: AccessService = Depends(get_access_service),
):
    """
    Current access status.

    Returns:
        has_access plus days_left, or the reason access is denied
    """
    return AccessStatusResponse(**asdict(access_service.get_access_status(current_user)))
