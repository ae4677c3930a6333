"""Auth API routes — login, signup, profile and password management."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from buildhub.application.services.auth_service import (
    authenticate_user,
    change_password,
    create_user,
    issue_token_for,
    update_profile,
)
from buildhub.application.services.notification_service import NotificationCenter
from buildhub.application.services.password_reset_service import (
    find_valid_reset_token,
    issue_reset_token,
    reset_password,
)
from buildhub.config import Settings
from buildhub.core.exceptions import BadRequestException, UnauthorizedException
from buildhub.core.rate_limit import AUTH_MESSAGE, auth_rate_limit, limiter
from buildhub.domain.models.user import User
from buildhub.domain.repositories.reset_token_repository import ResetTokenRepository
from buildhub.domain.repositories.user_repository import UserRepository
from buildhub.domain.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ProfileUpdate,
    ResetPasswordRequest,
    SignupRequest,
    UserRead,
)
from buildhub.interfaces.api.deps import get_current_user
from buildhub.interfaces.deps import (
    get_app_settings,
    get_notification_center,
    get_reset_token_repository,
    get_user_repository,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent."


@router.post("/login", response_model=AuthResponse)
@limiter.limit(auth_rate_limit, error_message=AUTH_MESSAGE)
def login(
    request: Request,
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    user = authenticate_user(users, body.email, body.password)
    if not user:
        raise UnauthorizedException("Invalid email or password")

    return AuthResponse(user=UserRead.model_validate(user), token=issue_token_for(user, settings))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(auth_rate_limit, error_message=AUTH_MESSAGE)
def signup(
    request: Request,
    body: SignupRequest,
    users: UserRepository = Depends(get_user_repository),
    notifications: NotificationCenter = Depends(get_notification_center),
    settings: Settings = Depends(get_app_settings),
):
    user = create_user(
        users,
        name=body.name,
        email=body.email,
        password=body.password,
        rounds=settings.BCRYPT_ROUNDS,
    )
    if user is None:
        raise BadRequestException("User with this email already exists")

    notifications.notify_welcome(user.id, user.name)
    return AuthResponse(user=UserRead.model_validate(user), token=issue_token_for(user, settings))


@router.get("/profile")
def get_profile(user: User = Depends(get_current_user)):
    return {"user": UserRead.model_validate(user)}


@router.put("/profile")
def put_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    updated = update_profile(users, user, name=body.name, avatar=body.avatar)
    return {"user": UserRead.model_validate(updated)}


@router.post("/forgot-password")
@limiter.limit(auth_rate_limit, error_message=AUTH_MESSAGE)
def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: ResetTokenRepository = Depends(get_reset_token_repository),
    settings: Settings = Depends(get_app_settings),
):
    token = issue_reset_token(users, tokens, body.email, settings=settings)
    response = {"message": FORGOT_PASSWORD_MESSAGE}
    if token and settings.ENVIRONMENT == "development":
        response["reset_token"] = token
    return response


@router.get("/verify-reset-token/{token}")
def verify_reset_token(token: str, tokens: ResetTokenRepository = Depends(get_reset_token_repository)):
    if find_valid_reset_token(tokens, token) is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"valid": False, "message": "Invalid or expired reset token."},
        )
    return {"valid": True, "message": "Token is valid."}


@router.post("/reset-password", response_model=MessageResponse)
def post_reset_password(
    body: ResetPasswordRequest,
    users: UserRepository = Depends(get_user_repository),
    tokens: ResetTokenRepository = Depends(get_reset_token_repository),
    settings: Settings = Depends(get_app_settings),
):
    if not reset_password(users, tokens, body.token, body.password, rounds=settings.BCRYPT_ROUNDS):
        raise BadRequestException("Invalid or expired reset token.")
    return MessageResponse(message="Password has been reset successfully.")


@router.post("/change-password", response_model=MessageResponse)
def post_change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    if not change_password(users, user, body.current_password, body.new_password, rounds=settings.BCRYPT_ROUNDS):
        raise BadRequestException("Current password is incorrect.")
    return MessageResponse(message="Password changed successfully.")
