import logging
from app.database.memory_store import Datastore
from app.modules.metadata.models import Table
from app.modules.metadata.schemas import (
    SchemaUpload, SchemaResponse, SchemaWithTablesResponse,
    TableResponse, TableWithFieldsResponse, FieldResponse
)
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class MetadataService:
    def __init__(self, datastore: Datastore):
        self.store = datastore.metadata

    def create_schema(self, schema_data: SchemaUpload) -> SchemaResponse:
        """Create a schema together with its tables and fields"""
        if self.store.get_schema_by_name(schema_data.name):
            raise HTTPException(status_code=400, detail=f"Schema '{schema_data.name}' already exists")

        schema = self.store.create_schema(schema_data.name, schema_data.description)
        for table_data in schema_data.tables:
            table = self.store.create_table(schema.id, table_data.name, table_data.description)
            for field_data in table_data.fields:
                self.store.create_field(table.id, field_data.name, field_data.data_type, field_data.description)

        logger.info(f"Created schema {schema.id} ({schema.name}) with {len(schema_data.tables)} table(s)")
        return SchemaResponse.model_validate(schema)

    def list_schemas(self) -> List[SchemaResponse]:
        """List all schemas"""
        return [SchemaResponse.model_validate(s) for s in self.store.list_schemas()]

    def get_schema_with_tables_and_fields(self, schema_id: int) -> SchemaWithTablesResponse:
        """Get schema with all tables and their fields"""
        schema = self.store.get_schema(schema_id)
        if not schema:
            raise HTTPException(status_code=404, detail="Schema not found")

        tables = [
            TableWithFieldsResponse(
                **TableResponse.model_validate(table).model_dump(),
                fields=[FieldResponse.model_validate(f) for f in self.store.list_fields(table.id)]
            )
            for table in self.store.list_tables(schema_id)
        ]
        return SchemaWithTablesResponse(**SchemaResponse.model_validate(schema).model_dump(), tables=tables)

    def list_tables_for_schema(self, schema_id: int) -> List[TableResponse]:
        """List tables of a schema"""
        if not self.store.get_schema(schema_id):
            raise HTTPException(status_code=404, detail="Schema not found")
        return [TableResponse.model_validate(t) for t in self.store.list_tables(schema_id)]

    def list_fields_for_table(self, table_id: int) -> List[FieldResponse]:
        """List fields of a table"""
        if not self.store.get_table(table_id):
            raise HTTPException(status_code=404, detail="Table not found")
        return [FieldResponse.model_validate(f) for f in self.store.list_fields(table_id)]

    def resolve_table(self, schema_id: int, table_id: int, fields: Optional[List[str]] = None) -> Table:
        """Validate that a table belongs to a schema and carries the requested fields.

        Raises 404 for an unknown schema and 400 for a table outside the
        schema or field names the table does not have.
        """
        if not self.store.get_schema(schema_id):
            raise HTTPException(status_code=404, detail="Schema not found")

        table = self.store.get_table(table_id)
        if not table or table.schema_id != schema_id:
            raise HTTPException(
                status_code=400,
                detail=f"Table {table_id} does not belong to schema {schema_id}"
            )

        if fields:
            known = {f.name for f in self.store.list_fields(table_id)}
            unknown = sorted(set(fields) - known)
            if unknown:
                raise HTTPException(
                    status_code=400,
                    detail=f"Unknown field(s) for table {table.name}: {', '.join(unknown)}"
                )
        return table
