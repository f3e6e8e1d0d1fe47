import logging
from collections import defaultdict
from typing import DefaultDict, Iterable, List, Optional, Tuple

from app.database.records import RecordTable, utcnow
from app.modules.access_policies.models import Effect
from app.modules.access_requests.models import AccessRequest, AccessRequestItem, RequestStatus

logger = logging.getLogger(__name__)


class AccessRequestStore:
    def __init__(self):
        self._requests: RecordTable[AccessRequest] = RecordTable("access_requests")
        self._items: RecordTable[AccessRequestItem] = RecordTable("access_request_items")
        self._items_by_request: DefaultDict[int, List[int]] = defaultdict(list)

    def create_request(
        self,
        user_id: str,
        schema_id: int,
        items: Iterable[dict],
        reason: Optional[str] = None,
    ) -> Tuple[AccessRequest, List[AccessRequestItem]]:
        """Store a pending request together with its items.

        Each item is a dict with table_id, effect and optional fields.
        """
        request = self._requests.insert(AccessRequest(
            id=self._requests.next_id(),
            user_id=user_id,
            schema_id=schema_id,
            reason=reason or None,
        ))

        created_items = []
        for item in items:
            fields = item.get("fields")
            created = self._items.insert(AccessRequestItem(
                id=self._items.next_id(),
                request_id=request.id,
                table_id=item["table_id"],
                effect=Effect(item["effect"]),
                fields=list(fields) if fields is not None else None,
            ))
            self._items_by_request[request.id].append(created.id)
            created_items.append(created)

        logger.info(f"Created access request {request.id} for user {user_id} with {len(created_items)} item(s)")
        return request, created_items

    def get_request(self, request_id: int) -> Optional[AccessRequest]:
        return self._requests.get(request_id)

    def list_requests(
        self,
        user_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> List[AccessRequest]:
        return self._requests.filter(
            lambda r: (user_id is None or r.user_id == user_id) and (status is None or r.status == status)
        )

    def get_items(self, request_id: int) -> List[AccessRequestItem]:
        """Items in the order they were submitted"""
        return self._items.get_many(self._items_by_request.get(request_id, []))

    def update_status(self, request_id: int, status: RequestStatus) -> Optional[AccessRequest]:
        request = self._requests.get(request_id)
        if request is None:
            return None
        request.status = RequestStatus(status)
        request.updated_at = utcnow()
        logger.info(f"Access request {request_id} marked {request.status.value}")
        return request
