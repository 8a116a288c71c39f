from typing import Callable, Dict, List, Optional
import logging
from pydantic import BaseModel
import enum

from ..core.security import UserRole
from ..gateway.base import GatewayError
from ..gateway.profiles import ProfileQuery
from ..models.profile import Profile
from ..models.session import Session
from .session_provider import SessionProvider

logger = logging.getLogger(__name__)

class DashboardKind(str, enum.Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    INVALID_USER_TYPE = "invalid_user_type"
    NO_PROFILE = "no_profile"

class SummaryCard(BaseModel):
    title: str
    value: Optional[str] = None
    caption: Optional[str] = None
    action_label: Optional[str] = None
    action_url: Optional[str] = None

class PlaceholderList(BaseModel):
    title: str
    empty_message: str
    empty_hint: str
    items: List[str] = []

class ProfileHeader(BaseModel):
    display_name: str
    initials: str
    profile_picture_url: Optional[str] = None

class DashboardView(BaseModel):
    kind: DashboardKind
    message: Optional[str] = None
    header: Optional[ProfileHeader] = None
    greeting: Optional[str] = None
    subtitle: Optional[str] = None
    cards: List[SummaryCard] = []
    lists: List[PlaceholderList] = []

def patient_dashboard(profile: Profile) -> DashboardView:
    return DashboardView(
        kind=DashboardKind.PATIENT,
        header=ProfileHeader(
            display_name=f"{profile.first_name} {profile.last_name}",
            initials=profile.initials,
            profile_picture_url=profile.profile_picture_url,
        ),
        greeting=f"Welcome back, {profile.first_name}!",
        subtitle="Manage your health appointments and records",
        cards=[
            SummaryCard(title="Find Doctors", action_label="Book Appointment", action_url="/find-doctors"),
            SummaryCard(title="My Appointments", action_label="View Appointments"),
            SummaryCard(title="My Profile", action_label="Edit Profile"),
        ],
        lists=[
            PlaceholderList(
                title="Recent Activity",
                empty_message="No recent activity",
                empty_hint="Your recent appointments and updates will appear here",
            ),
        ],
    )

def doctor_dashboard(profile: Profile) -> DashboardView:
    return DashboardView(
        kind=DashboardKind.DOCTOR,
        header=ProfileHeader(
            display_name=f"Dr. {profile.first_name} {profile.last_name}",
            initials=profile.initials,
            profile_picture_url=profile.profile_picture_url,
        ),
        greeting=f"Welcome, Dr. {profile.first_name}!",
        subtitle="Manage your practice and patient appointments",
        cards=[
            SummaryCard(title="Today's Appointments", value="0", caption="scheduled for today"),
            SummaryCard(title="Total Patients", value="0", caption="registered patients"),
            SummaryCard(title="Consultations", value="0", caption="this month"),
            SummaryCard(title="Profile Settings", action_label="Manage Profile"),
        ],
        lists=[
            PlaceholderList(
                title="Today's Schedule",
                empty_message="No appointments scheduled",
                empty_hint="Your appointments for today will appear here",
            ),
            PlaceholderList(
                title="Recent Patients",
                empty_message="No recent patients",
                empty_hint="Your recent patient consultations will appear here",
            ),
        ],
    )

# One shell per role; a role missing here is reported as invalid
DASHBOARDS: Dict[UserRole, Callable[[Profile], DashboardView]] = {
    UserRole.PATIENT: patient_dashboard,
    UserRole.DOCTOR: doctor_dashboard,
}

def dispatch_dashboard(profile: Optional[Profile]) -> DashboardView:
    """Pick the dashboard shell for a profile row."""
    if profile is None:
        return DashboardView(kind=DashboardKind.NO_PROFILE, message="No profile found")

    build = DASHBOARDS.get(profile.role)
    if build is None:
        return DashboardView(kind=DashboardKind.INVALID_USER_TYPE, message="Invalid user type")

    return build(profile)

async def load_dashboard(profiles: ProfileQuery, session: Session,
                         sessions: Optional[SessionProvider] = None) -> DashboardView:
    """Fetch the caller's profile row and dispatch on it."""
    try:
        profile = await profiles.fetch(session.user_id, session.access_token)
    except GatewayError as e:
        logger.error(f"Error fetching profile for user {session.user_id}: {e.message}")
        if e.status_code in (401, 403) and sessions is not None:
            sessions.evict(session.access_token)
        profile = None
    except Exception as e:
        logger.error(f"Error fetching profile for user {session.user_id}: {str(e)}")
        profile = None

    return dispatch_dashboard(profile)
