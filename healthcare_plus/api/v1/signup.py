from fastapi import APIRouter, Depends, File, UploadFile, status

from ...api.deps import get_registry, get_flow, rate_limit_check
from ...services.onboarding import OnboardingFlow, OnboardingRegistry, SPECIALIZATIONS
from ...schemas.onboarding import (
    DraftCreate, DraftUpdate, DraftResponse, DraftActionResponse
)

router = APIRouter(prefix="/signup", tags=["Sign-up"])

def _draft(flow: OnboardingFlow) -> DraftResponse:
    return DraftResponse.from_flow(flow, SPECIALIZATIONS)

@router.post("/drafts", response_model=DraftResponse, status_code=status.HTTP_201_CREATED)
async def create_draft(
    draft_data: DraftCreate,
    registry: OnboardingRegistry = Depends(get_registry)
):
    """Open a new sign-up form."""
    return _draft(registry.create(draft_data.role))

@router.get("/drafts/{draft_id}", response_model=DraftResponse)
async def get_draft(flow: OnboardingFlow = Depends(get_flow)):
    return _draft(flow)

@router.patch("/drafts/{draft_id}", response_model=DraftResponse)
async def update_draft(
    changes: DraftUpdate,
    flow: OnboardingFlow = Depends(get_flow)
):
    """Change form fields or the selected role."""
    flow.update(changes.changes())
    return _draft(flow)

@router.post("/drafts/{draft_id}/next", response_model=DraftResponse)
async def next_step(flow: OnboardingFlow = Depends(get_flow)):
    """Validate the current step and move forward."""
    flow.advance()
    return _draft(flow)

@router.post("/drafts/{draft_id}/previous", response_model=DraftResponse)
async def previous_step(flow: OnboardingFlow = Depends(get_flow)):
    flow.back()
    return _draft(flow)

@router.post("/drafts/{draft_id}/profile-picture", response_model=DraftActionResponse)
async def upload_profile_picture(
    file: UploadFile = File(...),
    flow: OnboardingFlow = Depends(get_flow)
):
    """Upload a profile picture as soon as it is selected."""
    data = await file.read()
    notification = await flow.upload_profile_picture(file.filename or "upload", data, file.content_type)
    return DraftActionResponse(draft=_draft(flow), notification=notification)

@router.post("/drafts/{draft_id}/license-document", response_model=DraftActionResponse)
async def upload_license_document(
    file: UploadFile = File(...),
    flow: OnboardingFlow = Depends(get_flow)
):
    data = await file.read()
    notification = await flow.upload_license_document(file.filename or "upload", data, file.content_type)
    return DraftActionResponse(draft=_draft(flow), notification=notification)

@router.post("/drafts/{draft_id}/submit", response_model=DraftActionResponse)
async def submit_draft(
    flow: OnboardingFlow = Depends(get_flow),
    registry: OnboardingRegistry = Depends(get_registry),
    _: None = Depends(rate_limit_check)
):
    """Create the account. The draft is discarded once the account exists."""
    outcome = await flow.submit()
    registry.discard(flow.id)
    return DraftActionResponse(
        notification=outcome.notification,
        redirect_to=outcome.redirect_to,
    )

@router.delete("/drafts/{draft_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_draft(
    draft_id: str,
    registry: OnboardingRegistry = Depends(get_registry)
):
    """Abandon a sign-up form."""
    registry.discard(draft_id)
