"""
Seed Sample Data Script
Populates the in-memory datastore with sample schemas, users and policies.
Runs at startup when SEED_SAMPLE_DATA=true and from POST /init-sample-data.
"""

import logging

from app.config.sample_data import SAMPLE_POLICIES, SAMPLE_SCHEMAS, SAMPLE_USERS
from app.database.memory_store import Datastore

logger = logging.getLogger(__name__)


def seed_users(datastore: Datastore) -> int:
    """Seed sample users into the user directory"""
    created_count = 0
    for user in SAMPLE_USERS:
        if not datastore.users.exists(user["id"]):
            created_count += 1
        datastore.users.upsert(user["id"], user["email"], user["role"])
    logger.info(f"Users: {created_count} created")
    return created_count


def seed_schemas(datastore: Datastore) -> int:
    """Seed sample schemas with their tables and fields; existing schemas are left alone"""
    store = datastore.metadata
    created_count = 0
    skipped_count = 0

    for schema_data in SAMPLE_SCHEMAS:
        if store.get_schema_by_name(schema_data["name"]):
            skipped_count += 1
            logger.debug(f"Schema already present: {schema_data['name']}")
            continue

        schema = store.create_schema(schema_data["name"], schema_data["description"])
        for table_data in schema_data["tables"]:
            table = store.create_table(schema.id, table_data["name"], table_data["description"])
            for field_data in table_data["fields"]:
                store.create_field(table.id, field_data["name"], field_data["data_type"], field_data["description"])
        created_count += 1

    logger.info(f"Schemas: {created_count} created, {skipped_count} already present")
    return created_count


def _expand_fields(field_spec, field_names):
    if isinstance(field_spec, str) and field_spec.startswith("all_but:"):
        excluded = field_spec.split(":", 1)[1]
        return [name for name in field_names if name != excluded]
    return field_spec


def seed_policies(datastore: Datastore) -> int:
    """Seed sample policies; a policy is skipped when it would conflict with what the user already holds"""
    store = datastore.metadata
    created_count = 0

    for email, schema_name, table_name, effect, field_spec in SAMPLE_POLICIES:
        user = datastore.users.get_by_email(email)
        schema = store.get_schema_by_name(schema_name)
        if not user or not schema:
            logger.warning(f"Skipping sample policy for {email} on {schema_name}.{table_name}")
            continue

        table = next((t for t in store.list_tables(schema.id) if t.name == table_name), None)
        if not table:
            logger.warning(f"Skipping sample policy: table {schema_name}.{table_name} not found")
            continue

        fields = _expand_fields(field_spec, [f.name for f in store.list_fields(table.id)])
        existing = datastore.policies.get_policies_for_table(user.id, table.id)
        if any(p.effect.value == effect and p.fields == fields for p in existing):
            continue

        with datastore.policies.lock:
            if datastore.policies.has_conflict(user.id, table.id, effect, fields):
                logger.warning(f"Skipping sample policy for {email} on {schema_name}.{table_name}: conflict")
                continue
            datastore.policies.create_policy(user.id, schema.id, table.id, effect, fields)
        created_count += 1

    logger.info(f"Policies: {created_count} created")
    return created_count


def seed_sample_data(datastore: Datastore) -> dict:
    """Seed users, schemas and policies"""
    logger.info("Initializing sample data...")
    summary = {
        "users": seed_users(datastore),
        "schemas": seed_schemas(datastore),
        "policies": seed_policies(datastore),
    }
    logger.info("Sample data initialization complete!")
    return summary
