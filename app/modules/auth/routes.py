from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.permissions_config import ROLE_ADMIN, ROLE_USER, get_role_permissions
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    SetAdminRequest, CurrentUserResponse
)
from app.modules.auth.service import AuthService
from app.modules.users.models import User
from app.core.dependencies import get_auth_service, get_current_user, get_current_user_id, require_permission
from app.database.memory_store import Datastore, get_datastore
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    user_data: Dict = Depends(get_current_user_id),
    current_user: User = Depends(get_current_user)
):
    """Get current authenticated user, their role and permissions (for frontend UI)."""
    return CurrentUserResponse(
        id=current_user.id,
        email=current_user.email,
        role=current_user.role,
        permissions=get_role_permissions(current_user.role),
        app_metadata=user_data.get("app_metadata")
    )


@router.post("/set-admin", status_code=200)
async def set_admin(
    request: SetAdminRequest,
    current_user: User = Depends(require_permission("users:manage")),
    service: AuthService = Depends(get_auth_service),
    datastore: Datastore = Depends(get_datastore)
):
    """Grant or revoke the admin role for a user (admin only)"""
    service.set_admin(request.user_id, request.is_admin)

    known = datastore.users.get(request.user_id)
    if known:
        datastore.users.upsert(known.id, known.email, ROLE_ADMIN if request.is_admin else ROLE_USER)

    return {
        "message": f"User {request.user_id} admin status set to {request.is_admin}",
        "user_id": request.user_id,
        "is_admin": request.is_admin
    }
