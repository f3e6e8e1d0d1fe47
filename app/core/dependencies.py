"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.permissions_config import ROLE_ADMIN, ROLE_USER, get_role_permissions
from app.config.settings import settings
from app.database.memory_store import Datastore, get_datastore
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.modules.users.models import User
from supabase import Client
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def resolve_role(user_data: Dict[str, Any]) -> str:
    """Admin when app_metadata says so or the email is a configured admin email"""
    # app_metadata is set server-side and cannot be modified by users
    app_metadata = user_data.get("app_metadata") or {}
    if app_metadata.get("role") == ROLE_ADMIN:
        return ROLE_ADMIN
    email = (user_data.get("email") or "").lower()
    if email and email in settings.get_admin_emails_list():
        return ROLE_ADMIN
    return ROLE_USER


def get_current_user(
    user_data: dict = Depends(get_current_user_id),
    datastore: Datastore = Depends(get_datastore)
) -> User:
    """Authenticated caller, recorded in the user directory"""
    return datastore.users.upsert(
        user_id=user_data["id"],
        email=user_data.get("email") or "",
        role=resolve_role(user_data)
    )


def is_admin(user: User) -> bool:
    return user.role == ROLE_ADMIN


def has_permission(user: User, permission: str) -> bool:
    return permission in get_role_permissions(user.role)


def require_permission(required_permission: str):
    """Factory function to create permission check dependency"""
    def check_permission(user: User = Depends(get_current_user)) -> User:
        """Dependency to check if user has required permission"""
        if not has_permission(user, required_permission):
            logger.info(f"User {user.id} denied {required_permission}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return user
    return check_permission
