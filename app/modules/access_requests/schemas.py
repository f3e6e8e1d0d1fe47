from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.core.schemas import CamelModel
from app.modules.access_policies.models import Effect
from app.modules.access_policies.schemas import AccessPolicyResponse
from app.modules.access_requests.models import RequestStatus
from app.modules.metadata.schemas import SchemaResponse, TableResponse
from app.modules.users.schemas import UserResponse


class AccessRequestItemCreate(CamelModel):
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None


class AccessRequestCreate(CamelModel):
    schema_id: int
    reason: Optional[str] = None
    items: List[AccessRequestItemCreate] = Field(min_length=1)


class AccessRequestStatusUpdate(CamelModel):
    status: RequestStatus


class AccessRequestItemResponse(CamelModel):
    id: int
    request_id: int
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None
    created_at: datetime


class AccessRequestItemWithTableResponse(AccessRequestItemResponse):
    table: Optional[TableResponse] = None


class AccessRequestResponse(CamelModel):
    id: int
    user_id: str
    schema_id: int
    reason: Optional[str] = None
    status: RequestStatus
    created_at: datetime
    updated_at: datetime


class AccessRequestWithItemsResponse(AccessRequestResponse):
    user: Optional[UserResponse] = None
    schema_: Optional[SchemaResponse] = Field(None, alias="schema")
    items: List[AccessRequestItemWithTableResponse]


class AccessRequestDecisionResponse(AccessRequestResponse):
    applied_policies: List[AccessPolicyResponse] = []
    skipped_items: List[AccessRequestItemResponse] = []
