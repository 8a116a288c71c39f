from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPAuthorizationCredentials
from typing import Optional

from ..core.backend import Backend
from ..core.config import settings
from ..core.redis import get_redis
from ..core.security import security, AuthenticationError, PortalError
from ..gateway.identity import IdentityGateway
from ..models.session import AuthState, Session
from ..services.auth_service import AuthService
from ..services.onboarding import OnboardingFlow, OnboardingRegistry
from ..services.session_provider import SessionProvider

def get_backend(request: Request) -> Backend:
    """Backend bundle created at startup."""
    return request.app.state.backend

def get_session_provider(backend: Backend = Depends(get_backend)) -> SessionProvider:
    return backend.sessions

def get_identity(backend: Backend = Depends(get_backend)) -> IdentityGateway:
    return backend.identity

def get_auth_service(identity: IdentityGateway = Depends(get_identity)) -> AuthService:
    return AuthService(identity)

def get_registry(backend: Backend = Depends(get_backend)) -> OnboardingRegistry:
    return backend.drafts

def get_flow(
    draft_id: str,
    registry: OnboardingRegistry = Depends(get_registry)
) -> OnboardingFlow:
    return registry.get(draft_id)

async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """Bearer token from the Authorization header, if any."""
    if credentials is None:
        return None
    return credentials.credentials

async def get_auth_state(
    access_token: Optional[str] = Depends(get_access_token),
    sessions: SessionProvider = Depends(get_session_provider)
) -> AuthState:
    return await sessions.resolve(access_token)

async def get_current_session(
    auth_state: AuthState = Depends(get_auth_state)
) -> Session:
    """Require a signed-in caller."""
    if auth_state.loading:
        raise PortalError(
            "Authentication is still starting up. Please try again.",
            title="Loading",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if auth_state.user is None:
        raise AuthenticationError("Invalid or expired session")

    return auth_state.user

# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Basic rate limiting for sign-in and sign-up submission."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.RATE_LIMIT_WINDOW_SECONDS, 1)
    else:
        if int(current_requests) >= settings.RATE_LIMIT_REQUESTS:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests. Please try again later."
            )
        redis_client.incr(key)
