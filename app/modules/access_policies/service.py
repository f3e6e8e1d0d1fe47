import logging
from app.database.memory_store import Datastore
from app.modules.access_policies.schemas import (
    AccessPolicyCreate, AccessPolicyResponse,
    ConflictCheckRequest, ConflictCheckResponse,
    PolicyCopyRequest, PolicyCopyResponse, PolicyConflictResponse
)
from app.modules.metadata.service import MetadataService
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class AccessPolicyService:
    def __init__(self, datastore: Datastore):
        self.policies = datastore.policies
        self.users = datastore.users
        self.metadata = MetadataService(datastore)

    def _require_user(self, user_id: str, label: str = "User"):
        if not self.users.exists(user_id):
            raise HTTPException(status_code=404, detail=f"{label} {user_id} not found")

    def list_policies(self, user_id: Optional[str] = None) -> List[AccessPolicyResponse]:
        """List policies of one user, or of every user when user_id is None"""
        if user_id is None:
            policies = self.policies.get_all_policies()
        else:
            policies = self.policies.get_policies_for_user(user_id)
        return [AccessPolicyResponse.model_validate(p) for p in policies]

    def grant_policy(self, policy_data: AccessPolicyCreate) -> AccessPolicyResponse:
        """Create a policy directly, refusing it when it conflicts with the user's existing policies"""
        self._require_user(policy_data.user_id)
        self.metadata.resolve_table(policy_data.schema_id, policy_data.table_id, policy_data.fields)

        with self.policies.lock:
            conflicting = self.policies.find_conflicts(
                policy_data.user_id, policy_data.table_id, policy_data.effect, policy_data.fields
            )
            if conflicting:
                raise HTTPException(
                    status_code=409,
                    detail=(
                        f"Policy conflicts with existing policies "
                        f"{', '.join(str(p.id) for p in conflicting)} on table {policy_data.table_id}"
                    )
                )
            policy = self.policies.create_policy(
                user_id=policy_data.user_id,
                schema_id=policy_data.schema_id,
                table_id=policy_data.table_id,
                effect=policy_data.effect,
                fields=policy_data.fields,
            )
        return AccessPolicyResponse.model_validate(policy)

    def check_conflict(self, user_id: str, check: ConflictCheckRequest) -> ConflictCheckResponse:
        """Report whether a grant would conflict with the user's policies on the table"""
        conflicting = self.policies.find_conflicts(user_id, check.table_id, check.effect, check.fields)
        return ConflictCheckResponse(
            conflict=bool(conflicting),
            conflicting_policies=[AccessPolicyResponse.model_validate(p) for p in conflicting]
        )

    def delete_policy(self, policy_id: int) -> bool:
        """Delete a policy"""
        if not self.policies.delete_policy(policy_id):
            raise HTTPException(status_code=404, detail="Access policy not found")
        return True

    def copy_policies(self, copy_data: PolicyCopyRequest) -> PolicyCopyResponse:
        """Copy every policy of the source user onto the target user"""
        if copy_data.source_user_id == copy_data.target_user_id:
            raise HTTPException(status_code=400, detail="Source and target users must differ")
        self._require_user(copy_data.source_user_id, "Source user")
        self._require_user(copy_data.target_user_id, "Target user")

        outcome = self.policies.copy_policies(
            copy_data.source_user_id,
            copy_data.target_user_id,
            copy_data.replace_existing
        )
        return PolicyCopyResponse(
            success=True,
            message=f"Copied {len(outcome.copied)} access policies successfully",
            source_user_id=outcome.source_user_id,
            target_user_id=outcome.target_user_id,
            removed_count=outcome.removed_count,
            copied_count=len(outcome.copied),
            copied_policies=[AccessPolicyResponse.model_validate(p) for p in outcome.copied],
            conflicts=[PolicyConflictResponse.model_validate(c) for c in outcome.conflicts]
        )
