from pydantic import Field as PydanticField
from typing import Optional, List
from datetime import datetime

from app.core.schemas import CamelModel


class FieldUpload(CamelModel):
    name: str = PydanticField(min_length=1)
    data_type: str = PydanticField(min_length=1)
    description: Optional[str] = None


class TableUpload(CamelModel):
    name: str = PydanticField(min_length=1)
    description: Optional[str] = None
    fields: List[FieldUpload] = []


class SchemaUpload(CamelModel):
    name: str = PydanticField(min_length=1)
    description: Optional[str] = None
    tables: List[TableUpload] = []


class FieldResponse(CamelModel):
    id: int
    name: str
    data_type: str
    description: Optional[str] = None
    table_id: int
    created_at: datetime
    updated_at: datetime


class TableResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    schema_id: int
    created_at: datetime
    updated_at: datetime


class TableWithFieldsResponse(TableResponse):
    fields: List[FieldResponse]


class SchemaResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SchemaWithTablesResponse(SchemaResponse):
    tables: List[TableWithFieldsResponse]
