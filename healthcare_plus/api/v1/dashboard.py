from fastapi import APIRouter, Depends

from ...api.deps import get_backend, get_current_session
from ...core.backend import Backend
from ...models.session import Session
from ...services.dashboard import DashboardView, load_dashboard

router = APIRouter(tags=["Dashboard"])

@router.get("/dashboard", response_model=DashboardView)
async def dashboard(
    session: Session = Depends(get_current_session),
    backend: Backend = Depends(get_backend)
):
    """Patient or doctor dashboard for the signed-in user."""
    return await load_dashboard(backend.profiles, session, backend.sessions)
