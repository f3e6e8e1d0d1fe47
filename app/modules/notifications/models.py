# In-memory table: notifications

"""
notifications:
- id: integer (autoincrement primary key)
- user_id: text (recipient)
- type: text (not null) - "new_request" | "request_approved" | "request_rejected"
- message: text (not null)
- read: boolean (default: false)
- created_at: timestamp
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from app.database.records import utcnow


class NotificationType(str, Enum):
    NEW_REQUEST = "new_request"
    REQUEST_APPROVED = "request_approved"
    REQUEST_REJECTED = "request_rejected"


@dataclass
class Notification:
    id: int
    user_id: str
    type: NotificationType
    message: str
    read: bool = False
    created_at: datetime = field(default_factory=utcnow)
