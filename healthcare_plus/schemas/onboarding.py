from pydantic import BaseModel
from typing import Optional, List

from ..core.security import UserRole
from ..models.onboarding import OnboardingStep, STEP_NUMBERS
from .common import Notification

class DraftCreate(BaseModel):
    role: UserRole = UserRole.PATIENT

class DraftUpdate(BaseModel):
    """Partial form update; only the fields sent are changed."""

    role: Optional[UserRole] = None

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None

    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None

    medical_license: Optional[str] = None
    specialization: Optional[str] = None
    experience: Optional[str] = None
    qualifications: Optional[str] = None
    consultation_fee: Optional[str] = None
    bio: Optional[str] = None

    def changes(self) -> dict:
        return {name: value for name, value in self.model_dump(exclude_unset=True).items() if value is not None}

class DraftResponse(BaseModel):
    id: str
    step: OnboardingStep
    displayed_step: OnboardingStep
    step_number: int
    total_steps: int = 3
    role: UserRole

    first_name: str
    last_name: str
    email: str
    phone: str
    password_set: bool
    profile_picture_url: Optional[str] = None

    date_of_birth: str
    gender: str
    address: str
    emergency_contact: str

    medical_license: str
    specialization: str
    experience: str
    qualifications: str
    consultation_fee: str
    bio: str
    license_document_url: Optional[str] = None

    last_error: Optional[str] = None
    specializations: List[str] = []

    @classmethod
    def from_flow(cls, flow, specializations: Optional[List[str]] = None) -> "DraftResponse":
        draft = flow.draft
        fields = draft.model_dump(exclude={
            "password", "confirm_password", "created_at",
            "profile_picture_name", "license_document_name",
        })
        return cls(
            id=flow.id,
            step=flow.step,
            displayed_step=flow.displayed_step,
            step_number=STEP_NUMBERS[flow.step],
            password_set=bool(draft.password),
            last_error=flow.last_error,
            specializations=specializations or [],
            **fields,
        )

class DraftActionResponse(BaseModel):
    draft: Optional[DraftResponse] = None
    notification: Optional[Notification] = None
    redirect_to: Optional[str] = None
