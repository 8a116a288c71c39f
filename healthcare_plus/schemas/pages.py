from pydantic import BaseModel
from typing import Optional, List
import enum

from ..core.security import UserRole
from ..services.dashboard import DashboardView
from ..services.pages import LandingPage

class PageKind(str, enum.Enum):
    LOADING = "loading"
    LANDING = "landing"
    DASHBOARD = "dashboard"

class IndexPage(BaseModel):
    page: PageKind
    landing: Optional[LandingPage] = None
    dashboard: Optional[DashboardView] = None

class LoginPage(BaseModel):
    title: str = "Welcome Back"
    subtitle: str = "Sign in to your account"
    user_types: List[UserRole] = [UserRole.PATIENT, UserRole.DOCTOR]
    login_url: str = "/api/v1/auth/login"
    signup_url: str = "/signup"

class SignupPage(BaseModel):
    title: str = "Create Your Account"
    subtitle: str = "Join our healthcare community"
    role: UserRole
    user_types: List[UserRole] = [UserRole.PATIENT, UserRole.DOCTOR]
    step_titles: List[str] = ["Basic Information", "Profile Details", "Additional Information"]
    specializations: List[str]
    drafts_url: str = "/api/v1/signup/drafts"
    login_url: str = "/login"
