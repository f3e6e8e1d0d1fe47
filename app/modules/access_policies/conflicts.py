"""Conflict rules between access grants on the same user and table.

- allowAll cannot coexist with any allow or deny grant, in either order.
- allow and deny conflict only where their field sets intersect.
- Grants of the same effect never conflict, whatever their fields.

A missing field list on allow/deny counts as the empty set, so it
overlaps nothing.
"""

from itertools import combinations
from typing import Iterable, List, Optional, Sequence

from app.modules.access_policies.models import AccessPolicy, Effect, PolicyConflict


def _field_set(fields: Optional[Iterable[str]]) -> set:
    return set(fields) if fields else set()


def conflicts_between(
    effect: Effect,
    fields: Optional[Sequence[str]],
    other_effect: Effect,
    other_fields: Optional[Sequence[str]],
) -> bool:
    effect = Effect(effect)
    other_effect = Effect(other_effect)

    if effect is Effect.ALLOW_ALL:
        return other_effect is not Effect.ALLOW_ALL
    if other_effect is Effect.ALLOW_ALL:
        return True
    if effect is other_effect:
        return False
    return not _field_set(fields).isdisjoint(_field_set(other_fields))


def find_conflicts(
    existing: Iterable[AccessPolicy],
    effect: Effect,
    fields: Optional[Sequence[str]],
) -> List[AccessPolicy]:
    """Existing policies that a new (effect, fields) grant would conflict with.

    Callers pass only the policies of the same user on the same table.
    """
    return [p for p in existing if conflicts_between(effect, fields, p.effect, p.fields)]


def find_pairwise_conflicts(policies: Sequence[AccessPolicy]) -> List[PolicyConflict]:
    """Every conflicting pair among policies that share a user and table."""
    conflicts = []
    for first, second in combinations(sorted(policies, key=lambda p: p.id), 2):
        if first.user_id != second.user_id or first.table_id != second.table_id:
            continue
        if conflicts_between(first.effect, first.fields, second.effect, second.fields):
            conflicts.append(PolicyConflict(
                user_id=first.user_id,
                table_id=first.table_id,
                policy_id=first.id,
                conflicting_policy_id=second.id,
            ))
    return conflicts
