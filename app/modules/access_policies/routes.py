from fastapi import APIRouter, Depends, HTTPException, Query, status
from app.database.memory_store import Datastore, get_datastore
from app.modules.access_policies.schemas import (
    AccessPolicyCreate, AccessPolicyResponse,
    ConflictCheckRequest, ConflictCheckResponse,
    PolicyCopyRequest, PolicyCopyResponse
)
from app.modules.access_policies.service import AccessPolicyService
from app.modules.users.models import User
from app.core.dependencies import require_permission, has_permission
from typing import List, Optional

router = APIRouter(prefix="/access-policies", tags=["access-policies"])


def get_access_policy_service(datastore: Datastore = Depends(get_datastore)) -> AccessPolicyService:
    return AccessPolicyService(datastore)


@router.get("", response_model=List[AccessPolicyResponse])
async def list_access_policies(
    user_id: Optional[str] = Query(None, alias="userId"),
    current_user: User = Depends(require_permission("access_policies:read")),
    service: AccessPolicyService = Depends(get_access_policy_service)
):
    """List policies: own policies, or any user's (all when no userId) for admins"""
    if has_permission(current_user, "access_policies:read_all"):
        return service.list_policies(user_id=user_id)
    if user_id is not None and user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot view another user's access policies")
    return service.list_policies(user_id=current_user.id)


@router.post("", response_model=AccessPolicyResponse, status_code=201)
async def create_access_policy(
    policy_data: AccessPolicyCreate,
    current_user: User = Depends(require_permission("access_policies:create")),
    service: AccessPolicyService = Depends(get_access_policy_service)
):
    """Grant a policy directly (admin only); 409 when it conflicts with existing policies"""
    return service.grant_policy(policy_data)


@router.post("/check", response_model=ConflictCheckResponse)
async def check_access_policy_conflict(
    check: ConflictCheckRequest,
    current_user: User = Depends(require_permission("access_policies:read")),
    service: AccessPolicyService = Depends(get_access_policy_service)
):
    """Check whether a grant would conflict with a user's existing policies"""
    user_id = check.user_id or current_user.id
    if user_id != current_user.id and not has_permission(current_user, "access_policies:read_all"):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot check another user's access policies")
    return service.check_conflict(user_id, check)


@router.post("/copy", response_model=PolicyCopyResponse)
async def copy_access_policies(
    copy_data: PolicyCopyRequest,
    current_user: User = Depends(require_permission("access_policies:copy")),
    service: AccessPolicyService = Depends(get_access_policy_service)
):
    """Copy all policies from one user to another (admin only)"""
    return service.copy_policies(copy_data)


@router.delete("/{policy_id}", status_code=204)
async def delete_access_policy(
    policy_id: int,
    current_user: User = Depends(require_permission("access_policies:delete")),
    service: AccessPolicyService = Depends(get_access_policy_service)
):
    """Delete a policy (admin only)"""
    service.delete_policy(policy_id)
    return None
