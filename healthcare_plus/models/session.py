from pydantic import BaseModel
from typing import Optional
from datetime import datetime, timezone
import enum

class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"

class Session(BaseModel):
    user_id: str
    email: Optional[str] = None
    email_verified: bool = False
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= datetime.now(timezone.utc)

    def __repr__(self):
        return f"<Session(user_id='{self.user_id}', email_verified={self.email_verified})>"

class AuthState(BaseModel):
    user: Optional[Session] = None
    loading: bool = False
