from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.core.schemas import CamelModel
from app.modules.access_policies.models import Effect


class AccessPolicyCreate(CamelModel):
    user_id: str = Field(min_length=1)
    schema_id: int
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None


class AccessPolicyResponse(CamelModel):
    id: int
    user_id: str
    schema_id: int
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime


class ConflictCheckRequest(CamelModel):
    user_id: Optional[str] = None  # defaults to the caller
    schema_id: Optional[int] = None  # carried for context, not part of the conflict key
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None


class ConflictCheckResponse(CamelModel):
    conflict: bool
    conflicting_policies: List[AccessPolicyResponse]


class PolicyCopyRequest(CamelModel):
    source_user_id: str = Field(min_length=1)
    target_user_id: str = Field(min_length=1)
    replace_existing: bool = False


class PolicyConflictResponse(CamelModel):
    table_id: int
    policy_id: int
    conflicting_policy_id: int


class PolicyCopyResponse(CamelModel):
    success: bool = True
    message: str
    source_user_id: str
    target_user_id: str
    removed_count: int
    copied_count: int
    copied_policies: List[AccessPolicyResponse]
    conflicts: List[PolicyConflictResponse]
