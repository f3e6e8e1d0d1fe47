"""Shared test fixtures: a fresh datastore per test and a switchable caller."""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.dependencies import get_current_user_id
from app.database.memory_store import Datastore


ADMIN = {"id": "admin-1", "email": "admin@example.com", "app_metadata": {"role": "admin"}}
ALICE = {"id": "user-alice", "email": "alice@example.com", "app_metadata": {}}
BOB = {"id": "user-bob", "email": "bob@example.com", "app_metadata": {}}
CAROL = {"id": "user-carol", "email": "carol@example.com", "app_metadata": {}}


class Caller:
    """The identity the auth gateway reports for the next request."""

    def __init__(self):
        self.user_data = ADMIN

    def act_as(self, user_data):
        self.user_data = user_data


@pytest.fixture
def datastore():
    store = Datastore()
    for user in (ADMIN, ALICE, BOB, CAROL):
        role = "admin" if user["app_metadata"].get("role") == "admin" else "user"
        store.users.upsert(user["id"], user["email"], role)
    app.state.datastore = store
    yield store
    app.state.datastore = Datastore()


@pytest.fixture
def caller():
    return Caller()


@pytest.fixture
def client(datastore, caller):
    app.dependency_overrides[get_current_user_id] = lambda: caller.user_data
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sales(datastore):
    """Sales schema with Orders and Customers tables; returns their ids."""
    store = datastore.metadata
    schema = store.create_schema("Sales", "Sales department")
    orders = store.create_table(schema.id, "Orders")
    for name, data_type in [
        ("order_id", "integer"),
        ("customer_id", "integer"),
        ("total", "decimal"),
        ("status", "text"),
    ]:
        store.create_field(orders.id, name, data_type)
    customers = store.create_table(schema.id, "Customers")
    for name in ("customer_id", "name", "email"):
        store.create_field(customers.id, name, "text")
    return {"schema_id": schema.id, "orders_id": orders.id, "customers_id": customers.id}
