from typing import Dict, Optional, Tuple
import logging
import time

from ..core.config import settings
from ..gateway.identity import IdentityGateway, Subscription
from ..models.session import AuthEvent, AuthState, Session

logger = logging.getLogger(__name__)

class SessionProvider:
    """Process-wide authentication state.

    Created once per application. `start` subscribes to the identity
    gateway's auth notifications; until it has run every lookup reports
    ``loading=True``. `close` unsubscribes and forgets cached sessions.
    Sessions are cached by access token for at most `cache_seconds` and are
    re-checked with the gateway after that.
    """

    def __init__(self, identity: IdentityGateway,
                 cache_seconds: Optional[float] = None):
        self.identity = identity
        self.cache_seconds = settings.SESSION_CACHE_SECONDS if cache_seconds is None else cache_seconds
        self.loading = True
        self._sessions: Dict[str, Tuple[Session, float]] = {}
        self._subscription: Optional[Subscription] = None

    def __len__(self) -> int:
        return len(self._sessions)

    async def start(self) -> None:
        self._subscription = self.identity.on_auth_state_change(self._handle_auth_event)
        self.loading = False
        logger.info("Session provider started")

    async def close(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._sessions.clear()
        self.loading = True
        logger.info("Session provider stopped")

    def _handle_auth_event(self, event: AuthEvent, session: Optional[Session]) -> None:
        if session is None or not session.access_token:
            return

        if event in (AuthEvent.SIGNED_IN, AuthEvent.TOKEN_REFRESHED):
            self._store(session)
        elif event == AuthEvent.SIGNED_OUT:
            self.evict(session.access_token)

        logger.info(f"Auth state changed: {event.value} for user {session.user_id}")

    def _is_stale(self, session: Session, cached_at: float, now: float) -> bool:
        return session.is_expired or now - cached_at >= self.cache_seconds

    def _store(self, session: Session) -> None:
        now = time.monotonic()
        self.prune(now)
        self._sessions[session.access_token] = (session, now)

    def prune(self, now: Optional[float] = None) -> int:
        """Drop expired and stale entries; returns how many were dropped."""
        now = time.monotonic() if now is None else now
        stale = [
            token for token, (session, cached_at) in self._sessions.items()
            if self._is_stale(session, cached_at, now)
        ]
        for token in stale:
            del self._sessions[token]
        return len(stale)

    def evict(self, access_token: str) -> None:
        self._sessions.pop(access_token, None)

    def cached(self, access_token: str) -> Optional[Session]:
        """Fresh cached session for a token, or None when it has to be re-checked."""
        entry = self._sessions.get(access_token)
        if entry is None:
            return None

        session, cached_at = entry
        if self._is_stale(session, cached_at, time.monotonic()):
            del self._sessions[access_token]
            return None
        return session

    async def resolve(self, access_token: Optional[str]) -> AuthState:
        """Current auth state for a caller presenting `access_token`."""
        if self.loading:
            return AuthState(user=None, loading=True)

        if not access_token:
            return AuthState(user=None, loading=False)

        session = self.cached(access_token)
        if session is None:
            try:
                session = await self.identity.get_session(access_token)
            except Exception as e:
                # No retry: a failed restore means "no user"
                logger.warning(f"Session restore failed: {str(e)}")
                session = None

            if session is not None and session.is_expired:
                session = None
            if session is not None:
                self._store(session)

        return AuthState(user=session, loading=False)
