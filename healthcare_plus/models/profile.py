from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from ..core.security import UserRole

class Profile(BaseModel):
    """Row of the hosted `profiles` table, created by a server-side trigger at sign-up."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    profile_picture_url: Optional[str] = None
    user_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def role(self) -> Optional[UserRole]:
        return UserRole.parse(self.user_type)

    @property
    def initials(self) -> str:
        return f"{(self.first_name or '')[:1]}{(self.last_name or '')[:1]}"

    def __repr__(self):
        return f"<Profile(id='{self.id}', name='{self.first_name} {self.last_name}', user_type='{self.user_type}')>"
