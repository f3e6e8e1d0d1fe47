from fastapi import Request

from app.modules.users.store import UserDirectory
from app.modules.metadata.store import MetadataStore
from app.modules.access_policies.store import PolicyStore
from app.modules.access_requests.store import AccessRequestStore
from app.modules.notifications.store import NotificationStore


class Datastore:
    """All application state for one process. Constructed explicitly and injected into services."""

    def __init__(self):
        self.users = UserDirectory()
        self.metadata = MetadataStore()
        self.policies = PolicyStore()
        self.requests = AccessRequestStore()
        self.notifications = NotificationStore()


def get_datastore(request: Request) -> Datastore:
    return request.app.state.datastore
