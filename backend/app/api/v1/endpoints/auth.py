from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import (
    DuplicateError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
)
from app.core.logging_config import logger, set_user_id
from app.core.rate_limiter import auth_rate_limit, strict_rate_limit
from app.core.security import build_token_pair
from app.models.user import User
from app.modules.auth.dependencies import get_current_user
from app.schemas.auth import (
    UserRegister,
    UserLogin,
    Token,
    RefreshTokenRequest,
    UserResponse,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    PasswordResetResponse,
    MessageResponse,
)
from app.services.auth_service import AuthService
from app.services.email_service import email_service

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, you will receive password reset instructions."


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@strict_rate_limit()
async def register(
    request: Request,
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register new user (rate limited: 3/min). Always creates a regular user."""
    client_ip = _client_ip(request)

    try:
        user = await AuthService(db).register(
            email=user_data.email,
            password=user_data.password,
            username=user_data.username,
        )
    except DuplicateError as e:
        logger.log_auth_event(
            event="register",
            success=False,
            user_email=user_data.email,
            reason=e.message,
            client_ip=client_ip
        )
        raise

    logger.log_auth_event(
        event="register",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value
    )
    return user


@router.post("/login", response_model=LoginResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login with username or email (rate limited: 5/min)"""
    client_ip = _client_ip(request)

    try:
        user = await AuthService(db).authenticate(credentials.identifier, credentials.password)
    except (InvalidCredentialsError, InactiveAccountError) as e:
        logger.log_auth_event(
            event="login",
            success=False,
            user_email=credentials.identifier,
            reason=e.message,
            client_ip=client_ip
        )
        raise

    # Set user context for downstream logging
    set_user_id(str(user.id))

    logger.log_auth_event(
        event="login",
        success=True,
        user_email=user.email,
        client_ip=client_ip,
        user_role=user.role.value
    )

    return {**build_token_pair(user), "user": user}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user info"""
    return current_user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    current_user: User = Depends(get_current_user)
):
    """Tokens are stateless; the client discards them. Recorded for the audit log."""
    logger.log_auth_event(
        event="logout",
        success=True,
        user_email=current_user.email,
        client_ip=_client_ip(request)
    )
    return MessageResponse(message="Logged out successfully")


@router.post("/refresh", response_model=Token)
async def refresh_token(
    token_request: RefreshTokenRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """Refresh access token using refresh token"""
    try:
        tokens = await AuthService(db).refresh_tokens(token_request.refresh_token)
    except (InvalidTokenError, InactiveAccountError) as e:
        logger.log_auth_event(
            event="token_refresh",
            success=False,
            reason=e.message,
            client_ip=_client_ip(request)
        )
        raise

    return tokens


# ============================================
# Password Reset Endpoints
# ============================================

@router.post("/forgot-password", response_model=PasswordResetResponse)
@strict_rate_limit()
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Request password reset.

    The answer is the same whether or not the account exists. The reset link
    is mailed when SMTP is configured; in development the token is also
    returned so the flow can be exercised without a mail server.
    """
    user, token = await AuthService(db).create_password_reset(payload.email)

    response = PasswordResetResponse(message=FORGOT_PASSWORD_MESSAGE, success=True)
    if not user:
        return response

    await email_service.send_password_reset_email(
        to_email=user.email,
        user_name=user.username,
        reset_token=token
    )
    logger.log_auth_event(
        event="password_reset_requested",
        success=True,
        user_email=user.email,
        client_ip=_client_ip(request)
    )

    if settings.is_dev_mode():
        response.reset_token = token
    return response


@router.post("/reset-password", response_model=PasswordResetResponse)
async def reset_password(
    payload: ResetPasswordRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """Reset password using token from forgot-password email."""
    try:
        user = await AuthService(db).reset_password(payload.token, payload.new_password)
    except InvalidResetTokenError as e:
        logger.log_auth_event(
            event="password_reset",
            success=False,
            reason=e.message,
            client_ip=_client_ip(request)
        )
        raise

    logger.log_auth_event(
        event="password_reset",
        success=True,
        user_email=user.email,
        client_ip=_client_ip(request)
    )
    return PasswordResetResponse(
        message="Password has been reset successfully. You can now login with your new password.",
        success=True
    )
