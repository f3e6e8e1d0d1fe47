from app.modules.access_policies.models import Effect
from app.scripts.seed_sample_data import seed_sample_data

from conftest import ALICE


def test_seed_creates_schemas_users_and_policies(datastore):
    summary = seed_sample_data(datastore)

    assert summary["schemas"] == 3
    assert summary["users"] == 4
    assert summary["policies"] > 0
    assert [s.name for s in datastore.metadata.list_schemas()] == ["Sales", "Finance", "HR"]

    manager = datastore.users.get_by_email("manager@example.com")
    hr = datastore.metadata.get_schema_by_name("HR")
    employees = next(t for t in datastore.metadata.list_tables(hr.id) if t.name == "Employees")
    policy = datastore.policies.get_policies_for_table(manager.id, employees.id)[0]
    assert policy.effect is Effect.ALLOW
    assert "salary" not in policy.fields


def test_seed_is_idempotent(datastore):
    seed_sample_data(datastore)
    policy_count = len(datastore.policies)

    summary = seed_sample_data(datastore)

    assert summary == {"users": 0, "schemas": 0, "policies": 0}
    assert len(datastore.policies) == policy_count


def test_init_endpoint_is_admin_only(client, caller):
    assert client.post("/api/init-sample-data").json()["success"] is True
    caller.act_as(ALICE)
    assert client.post("/api/init-sample-data").status_code == 403
