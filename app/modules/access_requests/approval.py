"""Turn the items of an approved access request into access policies."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from app.modules.access_policies.models import AccessPolicy
from app.modules.access_policies.store import PolicyStore
from app.modules.access_requests.models import AccessRequest, AccessRequestItem

logger = logging.getLogger(__name__)


@dataclass
class ApprovalOutcome:
    request: AccessRequest
    applied: List[AccessPolicy] = field(default_factory=list)
    skipped: List[AccessRequestItem] = field(default_factory=list)

    @property
    def fully_applied(self) -> bool:
        return not self.skipped


def materialize_request(
    request: AccessRequest,
    items: Iterable[AccessRequestItem],
    policies: PolicyStore,
) -> ApprovalOutcome:
    """Create one policy per item, in item order, skipping items that conflict.

    Items that conflict with the user's existing policies (including ones
    created earlier in this same request) are skipped and logged. Nothing
    is rolled back: policies created before a failure stay in place.
    """
    outcome = ApprovalOutcome(request=request)

    with policies.lock:
        for item in items:
            if policies.has_conflict(request.user_id, item.table_id, item.effect, item.fields):
                logger.warning(
                    f"Conflict detected for user {request.user_id}, table {item.table_id}; "
                    f"skipping item {item.id} of request {request.id}"
                )
                outcome.skipped.append(item)
                continue

            outcome.applied.append(policies.create_policy(
                user_id=request.user_id,
                schema_id=request.schema_id,
                table_id=item.table_id,
                effect=item.effect,
                fields=item.fields,
            ))

    logger.info(
        f"Request {request.id}: applied {len(outcome.applied)} item(s), skipped {len(outcome.skipped)}"
    )
    return outcome
