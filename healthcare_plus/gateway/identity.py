from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional
import logging
import httpx

from ..core.security import verify_token, local_token_check_enabled, token_expiry
from ..models.session import AuthEvent, Session
from .base import GatewayError, raise_for_gateway, bearer

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, Optional[Session]], None]

class Subscription:
    """Handle returned by `on_auth_state_change`; call `unsubscribe` to stop notifications."""

    def __init__(self, listeners: List[AuthListener], listener: AuthListener):
        self._listeners = listeners
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._listener in self._listeners

    def unsubscribe(self) -> None:
        if self._listener in self._listeners:
            self._listeners.remove(self._listener)

class SignUpResult:
    def __init__(self, user: Dict[str, Any], session: Optional[Session]):
        self.user = user
        self.session = session

    @property
    def email_confirmed(self) -> bool:
        return bool(self.user.get("email_confirmed_at"))

def session_from_payload(payload: Dict[str, Any]) -> Session:
    """Build a Session from a token grant response."""
    user = payload.get("user") or {}
    if not user.get("id") or not payload.get("access_token"):
        raise GatewayError("Gateway returned an incomplete session")

    expires_at = None
    if payload.get("expires_at"):
        expires_at = datetime.fromtimestamp(payload["expires_at"], tz=timezone.utc)
    elif payload.get("expires_in"):
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=payload["expires_in"])

    return Session(
        user_id=user.get("id"),
        email=user.get("email"),
        email_verified=bool(user.get("email_confirmed_at")),
        access_token=payload.get("access_token"),
        refresh_token=payload.get("refresh_token"),
        expires_at=expires_at,
    )

class IdentityGateway:
    """Client for the hosted identity provider's auth API."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http
        self._listeners: List[AuthListener] = []

    # Auth state notifications
    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self._listeners, listener)

    def _notify(self, event: AuthEvent, session: Optional[Session]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:
                logger.exception(f"Auth listener failed handling {event.value}")

    # Gateway operations
    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Dict[str, Any],
        email_redirect_to: Optional[str] = None,
    ) -> SignUpResult:
        """Create an account. Without auto-confirm the gateway returns the bare user."""
        params = {"redirect_to": email_redirect_to} if email_redirect_to else None
        response = await self.http.post(
            "/auth/v1/signup",
            params=params,
            json={"email": email, "password": password, "data": metadata},
        )
        raise_for_gateway(response)

        body = response.json()
        if body.get("access_token"):
            session = session_from_payload(body)
            self._notify(AuthEvent.SIGNED_IN, session)
            return SignUpResult(body.get("user") or {}, session)

        return SignUpResult(body, None)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self.http.post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        raise_for_gateway(response)

        session = session_from_payload(response.json())
        self._notify(AuthEvent.SIGNED_IN, session)
        return session

    async def refresh_session(self, refresh_token: str) -> Session:
        response = await self.http.post(
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )
        raise_for_gateway(response)

        session = session_from_payload(response.json())
        self._notify(AuthEvent.TOKEN_REFRESHED, session)
        return session

    async def sign_out(self, session: Session) -> None:
        """End the session. A token the gateway already rejects is signed out locally."""
        response = await self.http.post(
            "/auth/v1/logout",
            headers=bearer(session.access_token),
        )
        if response.status_code in (401, 403):
            logger.info(f"Gateway no longer accepts the token of user {session.user_id}; signing out locally")
        else:
            raise_for_gateway(response)
        self._notify(AuthEvent.SIGNED_OUT, session)

    async def verify_otp(self, token_hash: str, type: str) -> None:
        response = await self.http.post(
            "/auth/v1/verify",
            json={"type": type, "token_hash": token_hash},
        )
        raise_for_gateway(response)

    async def get_session(self, access_token: str) -> Optional[Session]:
        """Restore the session an access token belongs to, or None if it is no longer valid."""
        if local_token_check_enabled():
            payload = verify_token(access_token)
            if payload is None:
                logger.info("Rejected access token locally")
                return None

        # Only trusted after the gateway accepts the token below
        expires_at = token_expiry(access_token)

        response = await self.http.get("/auth/v1/user", headers=bearer(access_token))
        if response.status_code in (401, 403):
            return None
        raise_for_gateway(response)

        user = response.json()
        if not user.get("id"):
            raise GatewayError("Gateway returned a user without an id", response.status_code)

        return Session(
            user_id=user["id"],
            email=user.get("email"),
            email_verified=bool(user.get("email_confirmed_at")),
            access_token=access_token,
            expires_at=expires_at,
        )
