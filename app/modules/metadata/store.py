from typing import List, Optional

from app.database.records import RecordTable
from app.modules.metadata.models import Field, Schema, Table


class MetadataStore:
    """Schema -> Table -> Field hierarchy."""

    def __init__(self):
        self.schemas: RecordTable[Schema] = RecordTable("schemas")
        self.tables: RecordTable[Table] = RecordTable("tables")
        self.fields: RecordTable[Field] = RecordTable("fields")

    def create_schema(self, name: str, description: Optional[str] = None) -> Schema:
        return self.schemas.insert(Schema(id=self.schemas.next_id(), name=name, description=description))

    def get_schema(self, schema_id: int) -> Optional[Schema]:
        return self.schemas.get(schema_id)

    def get_schema_by_name(self, name: str) -> Optional[Schema]:
        return next((s for s in self.schemas.all() if s.name == name), None)

    def list_schemas(self) -> List[Schema]:
        return self.schemas.all()

    def create_table(self, schema_id: int, name: str, description: Optional[str] = None) -> Table:
        return self.tables.insert(
            Table(id=self.tables.next_id(), name=name, schema_id=schema_id, description=description)
        )

    def get_table(self, table_id: int) -> Optional[Table]:
        return self.tables.get(table_id)

    def list_tables(self, schema_id: int) -> List[Table]:
        return self.tables.filter(lambda t: t.schema_id == schema_id)

    def create_field(self, table_id: int, name: str, data_type: str, description: Optional[str] = None) -> Field:
        return self.fields.insert(
            Field(id=self.fields.next_id(), name=name, data_type=data_type, table_id=table_id, description=description)
        )

    def list_fields(self, table_id: int) -> List[Field]:
        return self.fields.filter(lambda f: f.table_id == table_id)
