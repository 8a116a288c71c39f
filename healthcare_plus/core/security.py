from datetime import datetime, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from pydantic import BaseModel
from enum import Enum
import uuid

from .config import settings

# Bearer tokens are issued by the identity gateway; auto_error is off so
# public pages can render for anonymous visitors.
security = HTTPBearer(auto_error=False)

class UserRole(str, Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["UserRole"]:
        """Return the matching role, or None for null and unknown values."""
        try:
            return cls(value)
        except ValueError:
            return None

class TokenPayload(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    exp: Optional[int] = None
    aud: Optional[str] = None

# JWT utilities
def verify_token(token: str) -> Optional[TokenPayload]:
    """Decode a gateway-issued access token with the shared JWT secret.

    Returns None when the token is malformed, expired, signed with another
    key, or meant for another audience.
    """
    if not settings.GATEWAY_JWT_SECRET:
        return None

    try:
        payload = jwt.decode(
            token,
            settings.GATEWAY_JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.GATEWAY_JWT_AUDIENCE,
        )

        return TokenPayload(**payload)

    except JWTError:
        return None

def local_token_check_enabled() -> bool:
    return bool(settings.GATEWAY_JWT_SECRET)

def token_expiry(token: str) -> Optional[datetime]:
    """`exp` claim of a JWT read without verifying its signature, or None."""
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)

def random_object_name(filename: str) -> str:
    """Randomized object name keeping the original file extension."""
    extension = filename.rsplit(".", 1)[-1]
    return f"{uuid.uuid4().hex}.{extension}"

# Portal exceptions
class PortalError(HTTPException):
    """HTTP error carrying a notification title for the client to display."""

    title = "Error"

    def __init__(
        self,
        detail: str,
        title: Optional[str] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        if title:
            self.title = title

class AuthenticationError(PortalError):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            detail=detail,
            title="Not Signed In",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

class StepValidationError(PortalError):
    """Local validation failure; raised before any network call."""

    def __init__(self, title: str, detail: str):
        super().__init__(
            detail=detail,
            title=title,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

class GatewayRejected(PortalError):
    """The hosted backend refused the request; detail is its message verbatim."""

    def __init__(self, title: str, detail: str):
        super().__init__(detail=detail, title=title, status_code=status.HTTP_400_BAD_REQUEST)

class UnexpectedFailure(PortalError):
    def __init__(self, detail: str = "An unexpected error occurred. Please try again."):
        super().__init__(
            detail=detail,
            title="Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

class UploadFailed(PortalError):
    def __init__(self, detail: str):
        super().__init__(detail=detail, title="Upload failed", status_code=status.HTTP_502_BAD_GATEWAY)

class InvalidTransition(PortalError):
    def __init__(self, detail: str):
        super().__init__(detail=detail, title="Not Allowed", status_code=status.HTTP_409_CONFLICT)

class SubmissionInProgress(InvalidTransition):
    def __init__(self):
        super().__init__("Your account is already being created. Please wait.")

class DraftNotFound(PortalError):
    def __init__(self, draft_id: str):
        super().__init__(
            detail=f"Sign-up draft {draft_id} not found or expired",
            title="Not Found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
