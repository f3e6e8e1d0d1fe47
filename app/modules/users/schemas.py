from datetime import datetime

from app.core.schemas import CamelModel


class UserResponse(CamelModel):
    id: str
    email: str
    role: str
    created_at: datetime
