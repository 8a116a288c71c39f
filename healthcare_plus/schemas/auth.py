from pydantic import BaseModel
from typing import Optional
from datetime import datetime
import enum

from ..core.security import UserRole
from ..models.session import Session, AuthState
from .common import Notification

class UserLogin(BaseModel):
    email: str = ""
    password: str = ""
    # Chosen on the sign-in form; the profile row decides the dashboard
    user_type: Optional[UserRole] = UserRole.PATIENT

class RefreshTokenRequest(BaseModel):
    refresh_token: str

class EmailVerification(BaseModel):
    token_hash: Optional[str] = None
    type: Optional[str] = None

class UserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    email_verified: bool = False

    @classmethod
    def from_session(cls, session: Session) -> "UserResponse":
        return cls(id=session.user_id, email=session.email, email_verified=session.email_verified)

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_at: Optional[datetime] = None
    user: UserResponse
    notification: Notification
    redirect_to: Optional[str] = None

    @classmethod
    def from_session(cls, session: Session, notification: Notification,
                     redirect_to: Optional[str] = None) -> "TokenResponse":
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user=UserResponse.from_session(session),
            notification=notification,
            redirect_to=redirect_to,
        )

class AuthStateResponse(BaseModel):
    user: Optional[UserResponse] = None
    loading: bool

    @classmethod
    def from_state(cls, state: AuthState) -> "AuthStateResponse":
        user = UserResponse.from_session(state.user) if state.user else None
        return cls(user=user, loading=state.loading)

class ConfirmationStatus(str, enum.Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"

class EmailConfirmationResponse(BaseModel):
    status: ConfirmationStatus
    title: str
    message: str
    links: dict = {}
