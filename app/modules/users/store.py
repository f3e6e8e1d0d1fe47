import logging
from typing import Dict, List, Optional

from app.config.permissions_config import ROLE_ADMIN, ROLE_USER
from app.modules.users.models import User

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self):
        self._users: Dict[str, User] = {}

    def upsert(self, user_id: str, email: str, role: str = ROLE_USER) -> User:
        """Record a user, refreshing email and role when already known"""
        user = self._users.get(user_id)
        if user is None:
            user = User(id=user_id, email=email, role=role)
            self._users[user_id] = user
            logger.info(f"Registered user {user_id} ({email}) with role {role}")
        elif user.email != email or user.role != role:
            user.email = email
            user.role = role
        return user

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return next((u for u in self._users.values() if u.email.lower() == email), None)

    def exists(self, user_id: str) -> bool:
        return user_id in self._users

    def list_users(self) -> List[User]:
        return list(self._users.values())

    def list_admins(self) -> List[User]:
        return [u for u in self._users.values() if u.role == ROLE_ADMIN]
