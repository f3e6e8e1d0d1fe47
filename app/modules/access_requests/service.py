import logging
from app.database.memory_store import Datastore
from app.modules.access_requests.approval import materialize_request
from app.modules.access_requests.models import RequestStatus
from app.modules.access_requests.schemas import (
    AccessRequestCreate, AccessRequestResponse, AccessRequestWithItemsResponse,
    AccessRequestItemResponse, AccessRequestItemWithTableResponse, AccessRequestDecisionResponse
)
from app.modules.access_policies.schemas import AccessPolicyResponse
from app.modules.metadata.schemas import SchemaResponse, TableResponse
from app.modules.metadata.service import MetadataService
from app.modules.notifications.models import NotificationType
from app.modules.notifications.service import NotificationService
from app.modules.users.models import User
from app.modules.users.schemas import UserResponse
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class AccessRequestService:
    def __init__(self, datastore: Datastore):
        self.requests = datastore.requests
        self.policies = datastore.policies
        self.users = datastore.users
        self.metadata_store = datastore.metadata
        self.metadata = MetadataService(datastore)
        self.notifications = NotificationService(datastore)

    def create_request(self, user: User, request_data: AccessRequestCreate) -> AccessRequestResponse:
        """Create a pending access request and notify every admin"""
        for item in request_data.items:
            self.metadata.resolve_table(request_data.schema_id, item.table_id, item.fields)

        request, _ = self.requests.create_request(
            user_id=user.id,
            schema_id=request_data.schema_id,
            reason=request_data.reason,
            items=[item.model_dump() for item in request_data.items],
        )

        self.notifications.notify_admins(
            NotificationType.NEW_REQUEST,
            f"New access request from {user.email}"
        )
        return AccessRequestResponse.model_validate(request)

    def list_requests(
        self,
        user_id: Optional[str] = None,
        status: Optional[RequestStatus] = None
    ) -> List[AccessRequestResponse]:
        """List requests of one user, or of every user when user_id is None"""
        requests = self.requests.list_requests(user_id=user_id, status=status)
        return [AccessRequestResponse.model_validate(r) for r in requests]

    def get_request_with_items(self, request_id: int) -> AccessRequestWithItemsResponse:
        """Get a request with its requester, schema and items (each with its table)"""
        request = self.requests.get_request(request_id)
        if not request:
            raise HTTPException(status_code=404, detail="Request not found")

        items = []
        for item in self.requests.get_items(request_id):
            table = self.metadata_store.get_table(item.table_id)
            items.append(AccessRequestItemWithTableResponse(
                **AccessRequestItemResponse.model_validate(item).model_dump(),
                table=TableResponse.model_validate(table) if table else None
            ))

        user = self.users.get(request.user_id)
        schema = self.metadata_store.get_schema(request.schema_id)
        return AccessRequestWithItemsResponse(
            **AccessRequestResponse.model_validate(request).model_dump(),
            user=UserResponse.model_validate(user) if user else None,
            schema_=SchemaResponse.model_validate(schema) if schema else None,
            items=items
        )

    def update_status(self, request_id: int, status: RequestStatus) -> AccessRequestDecisionResponse:
        """Approve or reject a pending request.

        Approval creates a policy for every item that does not conflict with
        the requester's existing policies; conflicting items are skipped and
        the request is still marked approved. The requester is notified
        either way.
        """
        status = RequestStatus(status)
        if status not in (RequestStatus.APPROVED, RequestStatus.REJECTED):
            raise HTTPException(status_code=400, detail="Invalid status")

        request = self.requests.get_request(request_id)
        if not request:
            raise HTTPException(status_code=404, detail="Request not found")
        if request.status is not RequestStatus.PENDING:
            raise HTTPException(status_code=409, detail=f"Request already {request.status.value}")

        request = self.requests.update_status(request_id, status)

        applied, skipped = [], []
        message = f"Your access request has been {status.value}"
        if status is RequestStatus.APPROVED:
            items = self.requests.get_items(request_id)
            outcome = materialize_request(request, items, self.policies)
            applied, skipped = outcome.applied, outcome.skipped
            if skipped:
                message += (
                    f" ({len(skipped)} of {len(items)} item(s) not applied "
                    f"because they conflict with your existing access)"
                )

        self.notifications.notify(
            request.user_id,
            NotificationType.REQUEST_APPROVED if status is RequestStatus.APPROVED else NotificationType.REQUEST_REJECTED,
            message
        )

        return AccessRequestDecisionResponse(
            **AccessRequestResponse.model_validate(request).model_dump(),
            applied_policies=[AccessPolicyResponse.model_validate(p) for p in applied],
            skipped_items=[AccessRequestItemResponse.model_validate(i) for i in skipped]
        )
