from app.database.memory_store import Datastore
from app.modules.users.schemas import UserResponse
from typing import List
from fastapi import HTTPException


class UserService:
    def __init__(self, datastore: Datastore):
        self.users = datastore.users

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user by ID"""
        user = self.users.get(user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return UserResponse.model_validate(user)

    def list_users(self, role: str = None, limit: int = 100, offset: int = 0) -> List[UserResponse]:
        """List known users, optionally filtered by role"""
        users = self.users.list_users()
        if role:
            users = [u for u in users if u.role == role]
        users.sort(key=lambda u: u.created_at)
        return [UserResponse.model_validate(u) for u in users[offset:offset + limit]]
