from fastapi import APIRouter, Depends, HTTPException
from app.database.memory_store import Datastore, get_datastore
from app.modules.access_requests.models import RequestStatus
from app.modules.access_requests.schemas import (
    AccessRequestCreate, AccessRequestStatusUpdate, AccessRequestResponse,
    AccessRequestWithItemsResponse, AccessRequestDecisionResponse
)
from app.modules.access_requests.service import AccessRequestService
from app.modules.users.models import User
from app.core.dependencies import require_permission, has_permission
from typing import List, Optional

router = APIRouter(prefix="/access-requests", tags=["access-requests"])


def get_access_request_service(datastore: Datastore = Depends(get_datastore)) -> AccessRequestService:
    return AccessRequestService(datastore)


@router.post("", response_model=AccessRequestResponse, status_code=201)
async def create_access_request(
    request_data: AccessRequestCreate,
    current_user: User = Depends(require_permission("access_requests:create")),
    service: AccessRequestService = Depends(get_access_request_service)
):
    """Submit an access request for one or more tables of a schema"""
    return service.create_request(current_user, request_data)


@router.get("", response_model=List[AccessRequestResponse])
async def list_access_requests(
    status: Optional[RequestStatus] = None,
    current_user: User = Depends(require_permission("access_requests:read")),
    service: AccessRequestService = Depends(get_access_request_service)
):
    """List requests: all for admins, own otherwise"""
    if has_permission(current_user, "access_requests:read_all"):
        return service.list_requests(status=status)
    return service.list_requests(user_id=current_user.id, status=status)


@router.get("/{request_id}", response_model=AccessRequestWithItemsResponse)
async def get_access_request(
    request_id: int,
    current_user: User = Depends(require_permission("access_requests:read")),
    service: AccessRequestService = Depends(get_access_request_service)
):
    """Get a request with its items (own requests only unless admin)"""
    request = service.get_request_with_items(request_id)
    if request.user_id != current_user.id and not has_permission(current_user, "access_requests:read_all"):
        raise HTTPException(status_code=403, detail="Forbidden")
    return request


@router.patch("/{request_id}", response_model=AccessRequestDecisionResponse)
async def update_access_request(
    request_id: int,
    status_update: AccessRequestStatusUpdate,
    current_user: User = Depends(require_permission("access_requests:review")),
    service: AccessRequestService = Depends(get_access_request_service)
):
    """Approve or reject a pending request (admin only)"""
    return service.update_status(request_id, status_update.status)
