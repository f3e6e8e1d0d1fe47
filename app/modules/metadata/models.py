# In-memory tables: schemas, tables, fields
# Policies reference schema_id/table_id by value; nothing cascades.

"""
schemas:
- id: integer (autoincrement primary key)
- name: text (not null, unique)
- description: text (nullable)
- created_at / updated_at: timestamp

tables:
- id: integer (autoincrement primary key)
- name: text (not null)
- description: text (nullable)
- schema_id: integer (references schemas.id, not null)
- created_at / updated_at: timestamp

fields:
- id: integer (autoincrement primary key)
- name: text (not null)
- data_type: text (not null) - free-text label such as "integer", "text"
- description: text (nullable)
- table_id: integer (references tables.id, not null)
- created_at / updated_at: timestamp
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from app.database.records import utcnow


@dataclass
class Schema:
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class Table:
    id: int
    name: str
    schema_id: int
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class Field:
    id: int
    name: str
    data_type: str
    table_id: int
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
