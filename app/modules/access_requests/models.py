# In-memory tables: access_requests, access_request_items

"""
access_requests:
- id: integer (autoincrement primary key)
- user_id: text (requester)
- schema_id: integer (references schemas.id)
- reason: text (nullable)
- status: text (not null, default "pending") - "pending" | "approved" | "rejected"
- created_at / updated_at: timestamp

access_request_items:
- id: integer (autoincrement primary key)
- request_id: integer (references access_requests.id, owned by the request)
- table_id: integer (references tables.id)
- effect: text (not null) - "allow" | "allowAll" | "deny"
- fields: json (nullable) - list of field names
- created_at: timestamp
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from app.database.records import utcnow
from app.modules.access_policies.models import Effect


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class AccessRequest:
    id: int
    user_id: str
    schema_id: int
    reason: Optional[str] = None
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class AccessRequestItem:
    id: int
    request_id: int
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None
    created_at: datetime = field(default_factory=utcnow)
