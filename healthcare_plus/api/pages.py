from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from typing import Optional

from .deps import get_auth_state, get_auth_service, get_backend
from ..core.backend import Backend
from ..core.security import UserRole
from ..models.session import AuthState
from ..services.auth_service import AuthService
from ..services.dashboard import load_dashboard
from ..services.directory import DirectoryView, directory_view
from ..services.onboarding import SPECIALIZATIONS
from ..services.pages import landing_page
from ..schemas.auth import EmailVerification, EmailConfirmationResponse
from ..schemas.pages import IndexPage, PageKind, LoginPage, SignupPage

router = APIRouter(tags=["Pages"])

@router.get("/", response_model=IndexPage)
async def index(
    auth_state: AuthState = Depends(get_auth_state),
    backend: Backend = Depends(get_backend)
):
    """Dashboard for signed-in users, landing page for everyone else."""
    if auth_state.loading:
        return IndexPage(page=PageKind.LOADING)

    if auth_state.user:
        dashboard = await load_dashboard(backend.profiles, auth_state.user, backend.sessions)
        return IndexPage(page=PageKind.DASHBOARD, dashboard=dashboard)

    return IndexPage(page=PageKind.LANDING, landing=landing_page())

@router.get("/login", response_model=LoginPage)
async def login_page(auth_state: AuthState = Depends(get_auth_state)):
    if auth_state.user:
        return RedirectResponse(url="/", status_code=303)
    return LoginPage()

@router.get("/signup", response_model=SignupPage)
async def signup_page(
    type: Optional[str] = None,
    auth_state: AuthState = Depends(get_auth_state)
):
    """Sign-up form, preselecting the role from ``?type=``."""
    if auth_state.user:
        return RedirectResponse(url="/", status_code=303)
    role = UserRole.parse(type) or UserRole.PATIENT
    return SignupPage(role=role, specializations=SPECIALIZATIONS)

@router.get("/find-doctors", response_model=DirectoryView)
async def find_doctors_page(search: str = "", specialization: str = ""):
    return directory_view(search, specialization)

@router.get("/email-confirmation", response_model=EmailConfirmationResponse)
async def email_confirmation_page(
    token_hash: Optional[str] = None,
    type: Optional[str] = None,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Landing target of the confirmation link sent at sign-up."""
    return await auth_service.confirm_email(EmailVerification(token_hash=token_hash, type=type))
