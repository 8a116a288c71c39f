from typing import Optional
import logging
import httpx

from .config import settings
from ..gateway.identity import IdentityGateway
from ..gateway.profiles import ProfileQuery
from ..gateway.storage import ObjectStorage
from ..services.onboarding import OnboardingRegistry
from ..services.session_provider import SessionProvider

logger = logging.getLogger(__name__)

class Backend:
    """Clients for the hosted backend plus the process-wide state built on them.

    One instance lives on ``app.state.backend`` between startup and shutdown.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.http = httpx.AsyncClient(
            base_url=settings.GATEWAY_URL,
            headers={
                "apikey": settings.GATEWAY_ANON_KEY,
                "Authorization": f"Bearer {settings.GATEWAY_ANON_KEY}",
            },
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
            transport=transport,
        )
        self.identity = IdentityGateway(self.http)
        self.storage = ObjectStorage(self.http)
        self.profiles = ProfileQuery(self.http)
        self.sessions = SessionProvider(self.identity)
        self.drafts = OnboardingRegistry(self.identity, self.storage)

    async def start(self) -> None:
        await self.sessions.start()
        logger.info(f"Connected to hosted backend at {settings.GATEWAY_URL}")

    async def close(self) -> None:
        await self.sessions.close()
        self.drafts.clear()
        await self.http.aclose()
