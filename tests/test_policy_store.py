import pytest

from app.modules.access_policies.models import Effect
from app.modules.access_policies.store import PolicyStore


@pytest.fixture
def store():
    return PolicyStore()


class TestIndices:
    def test_create_assigns_increasing_ids(self, store):
        first = store.create_policy("u1", 1, 10, Effect.ALLOW, ["a"])
        second = store.create_policy("u1", 1, 10, "deny", ["b"])
        assert second.id > first.id
        assert second.effect is Effect.DENY
        assert len(store) == 2

    def test_fields_are_copied(self, store):
        fields = ["a", "b"]
        policy = store.create_policy("u1", 1, 10, Effect.ALLOW, fields)
        fields.append("c")
        assert policy.fields == ["a", "b"]

    def test_lookups_by_user_and_table(self, store):
        p1 = store.create_policy("u1", 1, 10, Effect.ALLOW, ["a"])
        p2 = store.create_policy("u1", 1, 11, Effect.ALLOW_ALL)
        p3 = store.create_policy("u2", 1, 10, Effect.DENY, ["a"])

        assert store.get_policies_for_user("u1") == [p1, p2]
        assert store.get_policies_for_table("u1", 10) == [p1]
        assert store.get_policies_for_table("u2", 10) == [p3]
        assert store.get_policies_for_user("nobody") == []
        assert store.get_all_policies() == [p1, p2, p3]

    def test_delete_removes_from_every_index(self, store):
        p1 = store.create_policy("u1", 1, 10, Effect.ALLOW, ["a"])
        p2 = store.create_policy("u1", 1, 10, Effect.DENY, ["b"])

        assert store.delete_policy(p1.id) is True
        assert store.get_policy(p1.id) is None
        assert store.get_policies_for_user("u1") == [p2]
        assert store.get_policies_for_table("u1", 10) == [p2]

    def test_delete_unknown_policy(self, store):
        assert store.delete_policy(999) is False

    def test_ids_are_not_reused_after_delete(self, store):
        p1 = store.create_policy("u1", 1, 10, Effect.ALLOW, ["a"])
        store.delete_policy(p1.id)
        p2 = store.create_policy("u1", 1, 10, Effect.ALLOW, ["a"])
        assert p2.id != p1.id


class TestConflictLookup:
    def test_conflicts_are_scoped_to_user_and_table(self, store):
        store.create_policy("u1", 1, 10, Effect.ALLOW, ["status"])
        assert store.has_conflict("u1", 10, Effect.DENY, ["status"]) is True
        assert store.has_conflict("u1", 11, Effect.DENY, ["status"]) is False
        assert store.has_conflict("u2", 10, Effect.DENY, ["status"]) is False

    def test_schema_is_not_part_of_the_key(self, store):
        store.create_policy("u1", 1, 10, Effect.ALLOW, ["status"])
        store.create_policy("u1", 2, 10, Effect.ALLOW, ["total"])
        conflicting = store.find_conflicts("u1", 10, Effect.DENY, ["status", "total"])
        assert len(conflicting) == 2

    def test_user_conflicts_report_pairs(self, store):
        a = store.create_policy("u1", 1, 10, Effect.ALLOW_ALL)
        b = store.create_policy("u1", 1, 10, Effect.DENY, ["x"])
        store.create_policy("u1", 1, 11, Effect.ALLOW, ["x"])
        conflicts = store.find_user_conflicts("u1")
        assert len(conflicts) == 1
        assert (conflicts[0].policy_id, conflicts[0].conflicting_policy_id) == (a.id, b.id)
        assert conflicts[0].table_id == 10


class TestCopy:
    def test_copy_keeps_existing_target_policies(self, store):
        store.create_policy("b", 1, 10, Effect.ALLOW, ["a"])
        store.create_policy("b", 1, 11, Effect.DENY, ["b"])
        store.create_policy("c", 1, 12, Effect.ALLOW_ALL)

        outcome = store.copy_policies("b", "c", replace_existing=False)

        assert outcome.removed_count == 0
        assert len(outcome.copied) == 2
        assert len(store.get_policies_for_user("c")) == 3
        assert len(store.get_policies_for_user("b")) == 2
        assert outcome.conflicts == []

    def test_copy_replaces_target_policies(self, store):
        source = store.create_policy("b", 1, 10, Effect.ALLOW, ["a"])
        store.create_policy("c", 1, 12, Effect.ALLOW_ALL)
        store.create_policy("c", 1, 13, Effect.ALLOW_ALL)

        outcome = store.copy_policies("b", "c", replace_existing=True)

        assert outcome.removed_count == 2
        target = store.get_policies_for_user("c")
        assert len(target) == 1
        copy = target[0]
        assert copy.id != source.id
        assert (copy.schema_id, copy.table_id, copy.effect, copy.fields) == (1, 10, Effect.ALLOW, ["a"])

    def test_copy_from_user_without_policies(self, store):
        store.create_policy("c", 1, 12, Effect.ALLOW_ALL)
        outcome = store.copy_policies("b", "c", replace_existing=True)
        assert outcome.copied == []
        assert store.get_policies_for_user("c") == []

    def test_copy_reports_conflicts_it_introduces(self, store):
        store.create_policy("b", 1, 10, Effect.DENY, ["salary"])
        store.create_policy("c", 1, 10, Effect.ALLOW_ALL)

        outcome = store.copy_policies("b", "c")

        assert len(outcome.copied) == 1
        assert len(outcome.conflicts) == 1
        assert outcome.conflicts[0].conflicting_policy_id == outcome.copied[0].id
