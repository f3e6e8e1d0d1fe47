from fastapi import APIRouter, Depends
from app.database.memory_store import Datastore, get_datastore
from app.modules.users.models import User
from app.modules.users.schemas import UserResponse
from app.modules.users.service import UserService
from app.core.dependencies import require_permission
from typing import List, Optional

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(datastore: Datastore = Depends(get_datastore)) -> UserService:
    return UserService(datastore)


@router.get("", response_model=List[UserResponse])
async def list_users(
    role: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    current_user: User = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    """List every user known to the API (admin only)"""
    return service.list_users(role=role, limit=limit, offset=offset)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    """Get user by ID (admin only)"""
    return service.get_user_by_id(user_id)
