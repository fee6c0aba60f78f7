"""
Authentication API endpoints
"""
from fastapi import APIRouter, Depends
import logging

from app.api.deps import get_auth_service, get_current_user
from app.repositories.base import UserRecord
from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _user_response(user: UserRecord) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        is_verified=user.is_verified,
        created_at=user.created_at,
        updated_at=user.updated_at
    )


# Endpoints that hash or check passwords are plain def and run in the threadpool

@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new account

    - Email and username must be unique
    - Password: 8+ chars with upper, lower, digit and symbol
    - Account is verified immediately and a 7-day token is returned
    """
    user, token = auth_service.register(request.email, request.password, request.username)
    return AuthResponse(user=_user_response(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Exchange email and password for a bearer token"""
    user, token = auth_service.login(request.email, request.password)
    return AuthResponse(user=_user_response(user), token=token)


@router.get("/me", response_model=UserResponse)
async def me(user: UserRecord = Depends(get_current_user)):
    """Return the authenticated user"""
    return _user_response(user)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Start a password reset

    Responds identically whether or not the email is registered.
    """
    auth_service.forgot_password(request.email)
    return MessageResponse(message="If that email is registered, a password reset link has been sent")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    request: ResetPasswordRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Set a new password using a reset token"""
    auth_service.reset_password(request.token, request.password)
    return MessageResponse(message="Password has been reset successfully")
