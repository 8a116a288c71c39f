from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging
import re
import uuid

from ..core.config import settings
from ..core.security import (
    UserRole, StepValidationError, GatewayRejected, UnexpectedFailure,
    UploadFailed, InvalidTransition, SubmissionInProgress, DraftNotFound,
    random_object_name
)
from ..gateway.base import GatewayError
from ..gateway.identity import IdentityGateway
from ..gateway.storage import ObjectStorage
from ..models.onboarding import OnboardingDraft, OnboardingStep, STEP_NUMBERS
from ..schemas.common import Notification, ActionResponse

logger = logging.getLogger(__name__)

SPECIALIZATIONS = [
    "Cardiology", "Dermatology", "Pediatrics", "Orthopedics",
    "Neurology", "Gynecology", "Psychiatry", "General Medicine",
    "Oncology", "Radiology", "Anesthesiology", "Pathology",
]

REQUIRED_BASIC_FIELDS = ("first_name", "last_name", "email", "phone")
REQUIRED_DOCTOR_FIELDS = ("medical_license", "specialization")

# Fields checked when leaving each step; changing one sends the form back there
BASIC_STEP_FIELDS = REQUIRED_BASIC_FIELDS + ("password", "confirm_password")
ROLE_STEP_FIELDS = ("role",) + REQUIRED_DOCTOR_FIELDS

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

def leading_int(value: str) -> Optional[int]:
    """Integer prefix of a form value ("12 years" -> 12), or None."""
    match = _LEADING_INT.match(value or "")
    return int(match.group()) if match else None

def leading_float(value: str) -> Optional[float]:
    match = _LEADING_FLOAT.match(value or "")
    return float(match.group()) if match else None

def build_signup_metadata(draft: OnboardingDraft) -> Dict[str, Any]:
    """User metadata attached to the sign-up call; doctor fields only for doctors."""
    metadata: Dict[str, Any] = {
        "first_name": draft.first_name,
        "last_name": draft.last_name,
        "phone": draft.phone,
        "user_type": draft.role.value,
        "profile_picture_url": draft.profile_picture_url or None,
    }

    if draft.role == UserRole.DOCTOR:
        metadata.update({
            "medical_license": draft.medical_license,
            "specialization": draft.specialization,
            "experience_years": leading_int(draft.experience) if draft.experience else None,
            "qualifications": draft.qualifications,
            "consultation_fee": leading_float(draft.consultation_fee) if draft.consultation_fee else None,
            "bio": draft.bio,
        })
        if draft.license_document_url:
            metadata["license_document_url"] = draft.license_document_url

    return metadata

def validate_basic_step(draft: OnboardingDraft) -> None:
    """Step 1 rules, first failure wins: required fields, password length, password match."""
    if not all(getattr(draft, field) for field in REQUIRED_BASIC_FIELDS):
        raise StepValidationError("Missing Information", "Please fill in all required fields.")

    if not draft.password or len(draft.password) < settings.MIN_PASSWORD_LENGTH:
        raise StepValidationError(
            "Invalid Password",
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long."
        )

    if draft.password != draft.confirm_password:
        raise StepValidationError("Password Mismatch", "Passwords do not match.")

def validate_role_step(draft: OnboardingDraft) -> None:
    if draft.role == UserRole.DOCTOR:
        if not all(getattr(draft, field) for field in REQUIRED_DOCTOR_FIELDS):
            raise StepValidationError(
                "Missing Information",
                "Please fill in all required fields for doctor registration."
            )

class OnboardingFlow:
    """Multi-step sign-up form for one visitor.

    Steps move BASIC -> ROLE_DETAIL -> REVIEW -> SUBMITTING and end in
    SUCCESS or FAILURE. A failed submission shows the review step again and
    may be resubmitted.
    """

    def __init__(self, draft_id: str, draft: OnboardingDraft,
                 identity: IdentityGateway, storage: ObjectStorage):
        self.id = draft_id
        self.draft = draft
        self.identity = identity
        self.storage = storage
        self.step = OnboardingStep.BASIC
        self.last_error: Optional[str] = None
        self.updated_at = datetime.now(timezone.utc)

    @property
    def displayed_step(self) -> OnboardingStep:
        if self.step == OnboardingStep.FAILURE:
            return OnboardingStep.REVIEW
        return self.step

    @property
    def is_busy(self) -> bool:
        return self.step == OnboardingStep.SUBMITTING

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    def _ensure_editable(self) -> None:
        if self.step == OnboardingStep.SUBMITTING:
            raise SubmissionInProgress()
        if self.step == OnboardingStep.SUCCESS:
            raise InvalidTransition("This account has already been created.")

    def update(self, fields: Dict[str, Any]) -> OnboardingDraft:
        """Apply form changes. Editing a field an earlier step validated reopens that step."""
        self._ensure_editable()
        changed = {name for name, value in fields.items() if getattr(self.draft, name) != value}
        for name, value in fields.items():
            setattr(self.draft, name, value)

        current = STEP_NUMBERS[self.step]
        if current > 1 and changed.intersection(BASIC_STEP_FIELDS):
            self.step = OnboardingStep.BASIC
        elif current > 2 and changed.intersection(ROLE_STEP_FIELDS):
            self.step = OnboardingStep.ROLE_DETAIL

        self.touch()
        return self.draft

    def advance(self) -> OnboardingStep:
        self._ensure_editable()

        if self.step == OnboardingStep.BASIC:
            validate_basic_step(self.draft)
            self.step = OnboardingStep.ROLE_DETAIL
        elif self.step == OnboardingStep.ROLE_DETAIL:
            validate_role_step(self.draft)
            self.step = OnboardingStep.REVIEW
        else:
            raise InvalidTransition("Review your details and create your account.")

        self.touch()
        return self.step

    def back(self) -> OnboardingStep:
        self._ensure_editable()

        if self.step == OnboardingStep.ROLE_DETAIL:
            self.step = OnboardingStep.BASIC
        elif self.step in (OnboardingStep.REVIEW, OnboardingStep.FAILURE):
            self.step = OnboardingStep.ROLE_DETAIL
        else:
            raise InvalidTransition("Already at the first step.")

        self.touch()
        return self.step

    async def _upload(self, bucket: str, folder: str, filename: str,
                      data: bytes, content_type: Optional[str]) -> str:
        path = f"{folder}/{random_object_name(filename)}"
        await self.storage.upload(bucket, path, data, content_type)
        return self.storage.get_public_url(bucket, path)

    async def upload_profile_picture(self, filename: str, data: bytes,
                                     content_type: Optional[str] = None) -> Notification:
        """Upload immediately on selection; the step is never affected."""
        self._ensure_editable()
        try:
            url = await self._upload(settings.AVATAR_BUCKET, "profile-pictures", filename, data, content_type)
        except Exception as e:
            logger.error(f"Error uploading profile picture for draft {self.id}: {str(e)}")
            raise UploadFailed("Failed to upload profile picture. Please try again.")

        self.draft.profile_picture_url = url
        self.draft.profile_picture_name = filename
        self.touch()
        return Notification(title="Image uploaded", description="Profile picture uploaded successfully!")

    async def upload_license_document(self, filename: str, data: bytes,
                                      content_type: Optional[str] = None) -> Notification:
        self._ensure_editable()
        try:
            url = await self._upload(settings.LICENSE_BUCKET, "licenses", filename, data, content_type)
        except Exception as e:
            logger.error(f"Error uploading license document for draft {self.id}: {str(e)}")
            raise UploadFailed("Failed to upload license document. Please try again.")

        self.draft.license_document_url = url
        self.draft.license_document_name = filename
        self.touch()
        return Notification(title="Document uploaded", description="License document uploaded successfully!")

    async def submit(self) -> ActionResponse:
        """Issue the single sign-up call for this draft."""
        if self.step == OnboardingStep.SUBMITTING:
            raise SubmissionInProgress()
        if self.step not in (OnboardingStep.REVIEW, OnboardingStep.FAILURE):
            raise InvalidTransition("Complete the previous steps before creating your account.")

        validate_basic_step(self.draft)
        validate_role_step(self.draft)

        # Set before the first await so a concurrent submit sees it
        self.step = OnboardingStep.SUBMITTING
        self.touch()

        try:
            result = await self.identity.sign_up(
                email=self.draft.email,
                password=self.draft.password,
                metadata=build_signup_metadata(self.draft),
                email_redirect_to=settings.email_redirect_url,
            )
        except GatewayError as e:
            logger.warning(f"Signup error for {self.draft.email}: {e.message}")
            self.step = OnboardingStep.FAILURE
            self.last_error = e.message
            raise GatewayRejected("Signup Failed", e.message)
        except Exception:
            logger.exception(f"Unexpected error during signup for {self.draft.email}")
            self.step = OnboardingStep.FAILURE
            self.last_error = "An unexpected error occurred. Please try again."
            raise UnexpectedFailure()

        self.step = OnboardingStep.SUCCESS
        self.last_error = None
        logger.info(f"Created {self.draft.role.value} account for {self.draft.email}")

        if not result.email_confirmed:
            return ActionResponse(
                notification=Notification(
                    title="Check Your Email",
                    description=(
                        "We've sent you a confirmation link. Please check your email "
                        "and click the link to activate your account."
                    ),
                ),
                redirect_to="/login",
            )

        return ActionResponse(
            notification=Notification(title="Account Created", description="Your account is ready."),
            redirect_to="/",
        )

class OnboardingRegistry:
    """In-memory store of open sign-up drafts, one flow per draft id."""

    def __init__(self, identity: IdentityGateway, storage: ObjectStorage,
                 ttl_minutes: int = settings.DRAFT_TTL_MINUTES):
        self.identity = identity
        self.storage = storage
        self.ttl = timedelta(minutes=ttl_minutes)
        self._flows: Dict[str, OnboardingFlow] = {}

    def __len__(self) -> int:
        return len(self._flows)

    def create(self, role: UserRole = UserRole.PATIENT) -> OnboardingFlow:
        self.purge_expired()
        draft_id = uuid.uuid4().hex
        flow = OnboardingFlow(draft_id, OnboardingDraft(role=role), self.identity, self.storage)
        self._flows[draft_id] = flow
        return flow

    def get(self, draft_id: str) -> OnboardingFlow:
        flow = self._flows.get(draft_id)
        if flow is None:
            raise DraftNotFound(draft_id)
        return flow

    def discard(self, draft_id: str) -> None:
        self._flows.pop(draft_id, None)

    def purge_expired(self) -> int:
        cutoff = datetime.now(timezone.utc) - self.ttl
        expired = [
            draft_id for draft_id, flow in self._flows.items()
            if flow.updated_at < cutoff and not flow.is_busy
        ]
        for draft_id in expired:
            del self._flows[draft_id]
        if expired:
            logger.info(f"Discarded {len(expired)} expired sign-up drafts")
        return len(expired)

    def clear(self) -> None:
        self._flows.clear()
