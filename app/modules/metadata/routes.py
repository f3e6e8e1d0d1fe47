from fastapi import APIRouter, Depends
from app.database.memory_store import Datastore, get_datastore
from app.modules.metadata.schemas import (
    SchemaUpload, SchemaResponse, SchemaWithTablesResponse,
    TableResponse, FieldResponse
)
from app.modules.metadata.service import MetadataService
from app.modules.users.models import User
from app.core.dependencies import require_permission
from typing import List

router = APIRouter(tags=["metadata"])


def get_metadata_service(datastore: Datastore = Depends(get_datastore)) -> MetadataService:
    return MetadataService(datastore)


@router.get("/schemas", response_model=List[SchemaResponse])
async def list_schemas(
    current_user: User = Depends(require_permission("schemas:read")),
    service: MetadataService = Depends(get_metadata_service)
):
    """List all schemas"""
    return service.list_schemas()


@router.post("/schemas", response_model=SchemaResponse, status_code=201)
async def create_schema(
    schema_data: SchemaUpload,
    current_user: User = Depends(require_permission("schemas:create")),
    service: MetadataService = Depends(get_metadata_service)
):
    """Upload a schema with its tables and fields (admin only)"""
    return service.create_schema(schema_data)


@router.get("/schemas/{schema_id}", response_model=SchemaWithTablesResponse)
async def get_schema(
    schema_id: int,
    current_user: User = Depends(require_permission("schemas:read")),
    service: MetadataService = Depends(get_metadata_service)
):
    """Get a schema with its tables and fields"""
    return service.get_schema_with_tables_and_fields(schema_id)


@router.get("/schemas/{schema_id}/tables", response_model=List[TableResponse])
async def list_schema_tables(
    schema_id: int,
    current_user: User = Depends(require_permission("schemas:read")),
    service: MetadataService = Depends(get_metadata_service)
):
    """List the tables of a schema"""
    return service.list_tables_for_schema(schema_id)


@router.get("/tables/{table_id}/fields", response_model=List[FieldResponse])
async def list_table_fields(
    table_id: int,
    current_user: User = Depends(require_permission("schemas:read")),
    service: MetadataService = Depends(get_metadata_service)
):
    """List the fields of a table"""
    return service.list_fields_for_table(table_id)
