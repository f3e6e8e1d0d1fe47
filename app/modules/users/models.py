# In-memory table: users
# Identity and credentials are owned by Supabase Auth (auth.users table).
# This directory only records callers seen by the API so admins can
# list users and address them in policy copies and notifications.

"""
users:
- id: text (primary key, Supabase auth user id)
- email: text (not null)
- role: text (not null) - "admin" | "user"
- created_at: timestamp (first time the user was seen)
"""

from dataclasses import dataclass, field
from datetime import datetime

from app.config.permissions_config import ROLE_ADMIN, ROLE_USER
from app.database.records import utcnow


@dataclass
class User:
    id: str
    email: str
    role: str = ROLE_USER
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
