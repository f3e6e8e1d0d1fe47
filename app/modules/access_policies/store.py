import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import DefaultDict, List, Optional, Sequence, Tuple

from app.database.records import RecordTable, utcnow
from app.modules.access_policies.conflicts import find_conflicts, find_pairwise_conflicts
from app.modules.access_policies.models import AccessPolicy, Effect, PolicyConflict

logger = logging.getLogger(__name__)


@dataclass
class CopyOutcome:
    source_user_id: str
    target_user_id: str
    removed_count: int = 0
    copied: List[AccessPolicy] = field(default_factory=list)
    conflicts: List[PolicyConflict] = field(default_factory=list)


class PolicyStore:
    """Access policies indexed by id, by user and by (user, table).

    The secondary indices are maintained on every create and delete so
    conflict checks only scan one user's policies on one table.

    ``lock`` serializes writes. Callers that check for conflicts and then
    create a policy must hold it across both steps.
    """

    def __init__(self):
        self._policies: RecordTable[AccessPolicy] = RecordTable("access_policies")
        self._by_user: DefaultDict[str, List[int]] = defaultdict(list)
        self._by_user_table: DefaultDict[Tuple[str, int], List[int]] = defaultdict(list)
        self.lock = threading.RLock()

    def create_policy(
        self,
        user_id: str,
        schema_id: int,
        table_id: int,
        effect: Effect,
        fields: Optional[Sequence[str]] = None,
    ) -> AccessPolicy:
        """Store a new policy. No conflict check happens here."""
        effect = Effect(effect)
        with self.lock:
            now = utcnow()
            policy = AccessPolicy(
                id=self._policies.next_id(),
                user_id=user_id,
                schema_id=schema_id,
                table_id=table_id,
                effect=effect,
                fields=list(fields) if fields is not None else None,
                created_at=now,
                updated_at=now,
            )
            self._policies.insert(policy)
            self._by_user[user_id].append(policy.id)
            self._by_user_table[(user_id, table_id)].append(policy.id)

        logger.info(
            f"Created policy {policy.id}: user={user_id} table={table_id} "
            f"effect={effect.value} fields={policy.fields}"
        )
        return policy

    def get_policy(self, policy_id: int) -> Optional[AccessPolicy]:
        return self._policies.get(policy_id)

    def get_policies_for_user(self, user_id: str) -> List[AccessPolicy]:
        return self._policies.get_many(self._by_user.get(user_id, []))

    def get_policies_for_table(self, user_id: str, table_id: int) -> List[AccessPolicy]:
        return self._policies.get_many(self._by_user_table.get((user_id, table_id), []))

    def get_all_policies(self) -> List[AccessPolicy]:
        return self._policies.all()

    def delete_policy(self, policy_id: int) -> bool:
        with self.lock:
            policy = self._policies.delete(policy_id)
            if policy is None:
                return False
            self._unindex(self._by_user, policy.user_id, policy.id)
            self._unindex(self._by_user_table, (policy.user_id, policy.table_id), policy.id)

        logger.info(f"Deleted policy {policy_id} of user {policy.user_id}")
        return True

    @staticmethod
    def _unindex(index, key, policy_id: int):
        ids = index.get(key)
        if ids is None:
            return
        ids.remove(policy_id)
        if not ids:
            del index[key]

    def find_conflicts(
        self,
        user_id: str,
        table_id: int,
        effect: Effect,
        fields: Optional[Sequence[str]] = None,
    ) -> List[AccessPolicy]:
        """Policies of the user on the table that a new grant would conflict with.

        The schema is not part of the conflict key.
        """
        return find_conflicts(self.get_policies_for_table(user_id, table_id), effect, fields)

    def has_conflict(
        self,
        user_id: str,
        table_id: int,
        effect: Effect,
        fields: Optional[Sequence[str]] = None,
    ) -> bool:
        return bool(self.find_conflicts(user_id, table_id, effect, fields))

    def find_user_conflicts(self, user_id: str) -> List[PolicyConflict]:
        """Conflicting pairs among the policies a user already holds."""
        conflicts = []
        for (owner, _table_id), ids in list(self._by_user_table.items()):
            if owner != user_id or len(ids) < 2:
                continue
            conflicts.extend(find_pairwise_conflicts(self._policies.get_many(ids)))
        return conflicts

    def copy_policies(self, source_user_id: str, target_user_id: str, replace_existing: bool = False) -> CopyOutcome:
        """Duplicate every policy of the source user onto the target user.

        With replace_existing the target's policies are deleted first.
        Otherwise they stay alongside the copies. No conflict check is run;
        the outcome lists any conflicts the target holds afterwards.
        """
        outcome = CopyOutcome(source_user_id=source_user_id, target_user_id=target_user_id)
        with self.lock:
            source_policies = self.get_policies_for_user(source_user_id)

            if replace_existing:
                for policy in self.get_policies_for_user(target_user_id):
                    if self.delete_policy(policy.id):
                        outcome.removed_count += 1

            for policy in source_policies:
                outcome.copied.append(self.create_policy(
                    user_id=target_user_id,
                    schema_id=policy.schema_id,
                    table_id=policy.table_id,
                    effect=policy.effect,
                    fields=policy.fields,
                ))

            outcome.conflicts = self.find_user_conflicts(target_user_id)

        logger.info(
            f"Copied {len(outcome.copied)} policies from user {source_user_id} to {target_user_id} "
            f"(replace_existing={replace_existing}, removed={outcome.removed_count})"
        )
        if outcome.conflicts:
            logger.warning(
                f"User {target_user_id} holds {len(outcome.conflicts)} conflicting policy pair(s) after copy"
            )
        return outcome

    def __len__(self) -> int:
        return len(self._policies)
