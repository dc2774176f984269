"""
Authentication Routes

POST /register - Register new user
POST /login - Login with username or email and get JWT token
GET /me - Get current user info
"""

from fastapi import APIRouter, Depends

from alumni_api.api.deps import get_auth_service
from alumni_api.core.auth import get_current_user
from alumni_api.schemas.schemas import (
    CurrentUser, DataResponse, LoginRequest, RegisterRequest, TokenResponse, UserResponse
)
from alumni_api.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=DataResponse[UserResponse], status_code=201)
def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user account (role ``user``).

    Admin accounts are created with scripts/create_admin.py.
    """
    user = service.register(request)
    return DataResponse(message="Registered successfully. Please login.", data=user)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    return service.login(request)


@router.get("/me", response_model=DataResponse[UserResponse])
def get_me(
    user: CurrentUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Get current authenticated user's info."""
    return DataResponse(data=service.me(user))
