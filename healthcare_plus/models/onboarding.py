from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone
import enum

from ..core.security import UserRole

class OnboardingStep(str, enum.Enum):
    BASIC = "basic"
    ROLE_DETAIL = "role_detail"
    REVIEW = "review"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"

# Form step number shown to the user for each state
STEP_NUMBERS = {
    OnboardingStep.BASIC: 1,
    OnboardingStep.ROLE_DETAIL: 2,
    OnboardingStep.REVIEW: 3,
    OnboardingStep.SUBMITTING: 3,
    OnboardingStep.SUCCESS: 3,
    OnboardingStep.FAILURE: 3,
}

class OnboardingDraft(BaseModel):
    """Uncommitted sign-up form state. Every text field is kept as typed."""

    role: UserRole = UserRole.PATIENT

    # Common fields
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    confirm_password: str = ""
    profile_picture_url: Optional[str] = None
    profile_picture_name: Optional[str] = None

    # Patient specific
    date_of_birth: str = ""
    gender: str = ""
    address: str = ""
    emergency_contact: str = ""

    # Doctor specific
    medical_license: str = ""
    specialization: str = ""
    experience: str = ""
    qualifications: str = ""
    consultation_fee: str = ""
    bio: str = ""
    license_document_url: Optional[str] = None
    license_document_name: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<OnboardingDraft(email='{self.email}', role='{self.role.value}')>"
