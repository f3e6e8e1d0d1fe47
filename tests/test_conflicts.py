"""Conflict rules between a candidate grant and existing policies on one user and table."""
import pytest

from app.modules.access_policies.conflicts import (
    conflicts_between,
    find_conflicts,
    find_pairwise_conflicts,
)
from app.modules.access_policies.models import AccessPolicy, Effect


def _policy(policy_id, effect, fields=None, user_id="u1", table_id=1):
    return AccessPolicy(
        id=policy_id, user_id=user_id, schema_id=1, table_id=table_id,
        effect=Effect(effect), fields=fields,
    )


class TestAllowAllExclusivity:
    @pytest.mark.parametrize("other", ["allow", "deny"])
    @pytest.mark.parametrize("other_fields", [None, [], ["a"], ["a", "b"]])
    def test_allow_all_conflicts_in_both_orders(self, other, other_fields):
        assert conflicts_between(Effect.ALLOW_ALL, None, other, other_fields) is True
        assert conflicts_between(other, other_fields, Effect.ALLOW_ALL, None) is True

    def test_allow_all_with_fields_still_conflicts(self):
        assert conflicts_between("allowAll", ["x"], "allow", ["y"]) is True

    def test_two_allow_all_never_conflict(self):
        assert conflicts_between("allowAll", None, "allowAll", None) is False
        assert conflicts_between("allowAll", ["a"], "allowAll", ["a"]) is False


class TestFieldOverlap:
    @pytest.mark.parametrize("first,second", [
        (["a", "b"], ["c", "d"]),
        (["order_id"], ["status"]),
        ([], ["a"]),
    ])
    def test_disjoint_allow_and_deny_do_not_conflict(self, first, second):
        assert conflicts_between("allow", first, "deny", second) is False
        assert conflicts_between("deny", second, "allow", first) is False

    @pytest.mark.parametrize("first,second", [
        (["a", "b"], ["b", "c"]),
        (["status"], ["status"]),
        (["a", "b", "c"], ["c"]),
    ])
    def test_overlapping_allow_and_deny_conflict(self, first, second):
        assert conflicts_between("allow", first, "deny", second) is True
        assert conflicts_between("deny", second, "allow", first) is True

    @pytest.mark.parametrize("effect", ["allow", "deny"])
    def test_same_effect_never_conflicts(self, effect):
        assert conflicts_between(effect, ["a", "b"], effect, ["a", "b"]) is False
        assert conflicts_between(effect, ["a"], effect, ["a", "z"]) is False

    def test_missing_fields_overlap_nothing(self):
        assert conflicts_between("allow", None, "deny", ["a"]) is False
        assert conflicts_between("deny", ["a"], "allow", None) is False
        assert conflicts_between("allow", None, "deny", None) is False

    def test_field_order_is_irrelevant(self):
        assert conflicts_between("allow", ["b", "a"], "deny", ["a"]) is True


def test_unknown_effect_is_rejected():
    with pytest.raises(ValueError):
        conflicts_between("read", ["a"], "allow", ["a"])


def test_find_conflicts_returns_triggering_policies():
    existing = [
        _policy(1, "allow", ["order_id", "total"]),
        _policy(2, "deny", ["status"]),
        _policy(3, "allow", ["status"]),
    ]
    assert [p.id for p in find_conflicts(existing, Effect.DENY, ["total"])] == [1]
    assert [p.id for p in find_conflicts(existing, Effect.ALLOW_ALL, None)] == [1, 2, 3]
    assert find_conflicts(existing, Effect.ALLOW, ["order_id", "status"]) == [existing[1]]
    assert find_conflicts([], Effect.ALLOW_ALL, None) == []


def test_pairwise_conflicts_only_within_same_user_and_table():
    policies = [
        _policy(1, "allow", ["a"]),
        _policy(2, "deny", ["a"]),
        _policy(3, "deny", ["a"], table_id=2),
        _policy(4, "allowAll", None, user_id="u2"),
        _policy(5, "allow", ["b"], user_id="u2"),
    ]
    conflicts = find_pairwise_conflicts(policies)
    assert {(c.policy_id, c.conflicting_policy_id) for c in conflicts} == {(1, 2), (4, 5)}
    assert all(c.table_id == 1 for c in conflicts)
