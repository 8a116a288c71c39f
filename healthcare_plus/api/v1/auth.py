from fastapi import APIRouter, Depends

from ...api.deps import (
    get_auth_service, get_auth_state, get_current_session, rate_limit_check
)
from ...models.session import AuthState, Session
from ...services.auth_service import AuthService
from ...schemas.auth import (
    UserLogin, TokenResponse, RefreshTokenRequest, EmailVerification,
    EmailConfirmationResponse, AuthStateResponse, UserResponse
)
from ...schemas.common import ActionResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
    _: None = Depends(rate_limit_check)
):
    """Sign in with email and password."""
    return await auth_service.authenticate_user(login_data)

@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Exchange a refresh token for a new session."""
    return await auth_service.refresh_access_token(refresh_data.refresh_token)

@router.post("/logout", response_model=ActionResponse)
async def logout(
    session: Session = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Sign out the current session."""
    return await auth_service.logout_user(session)

@router.post("/verify-email", response_model=EmailConfirmationResponse)
async def verify_email(
    verification: EmailVerification,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Confirm an email address with the token from the confirmation link."""
    return await auth_service.confirm_email(verification)

@router.get("/session", response_model=AuthStateResponse)
async def current_auth_state(
    auth_state: AuthState = Depends(get_auth_state)
):
    """Current authentication state for the caller."""
    return AuthStateResponse.from_state(auth_state)

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    session: Session = Depends(get_current_session)
):
    """Get current user information."""
    return UserResponse.from_session(session)
