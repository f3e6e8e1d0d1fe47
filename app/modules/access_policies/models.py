# In-memory table: access_policies
# Several policies may exist for the same (user_id, table_id); whether they
# conflict is decided when a policy is written, not stored as a constraint.

"""
access_policies:
- id: integer (autoincrement primary key, never reused)
- user_id: text (owning user)
- schema_id: integer (references schemas.id)
- table_id: integer (references tables.id)
- effect: text (not null) - "allow" | "allowAll" | "deny"
- fields: json (nullable) - list of field names; null means not field-scoped
- created_at / updated_at: timestamp
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from app.database.records import utcnow


class Effect(str, Enum):
    ALLOW = "allow"
    ALLOW_ALL = "allowAll"
    DENY = "deny"


@dataclass
class AccessPolicy:
    id: int
    user_id: str
    schema_id: int
    table_id: int
    effect: Effect
    fields: Optional[List[str]] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class PolicyConflict:
    """Two stored policies of one user on one table that contradict each other."""

    user_id: str
    table_id: int
    policy_id: int
    conflicting_policy_id: int
