from typing import Optional
import httpx

from ..models.profile import Profile
from .base import raise_for_gateway, bearer

# PostgREST answers 406 when a single-object request matches no row
NO_ROW_STATUS = 406

class ProfileQuery:
    """Reads rows of the hosted `profiles` table."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def fetch(self, user_id: str, access_token: str) -> Optional[Profile]:
        """Return the profile keyed by the session's user id, or None if there is no row."""
        response = await self.http.get(
            "/rest/v1/profiles",
            params={"id": f"eq.{user_id}", "select": "*"},
            headers={
                **bearer(access_token),
                "Accept": "application/vnd.pgrst.object+json",
            },
        )
        if response.status_code == NO_ROW_STATUS:
            return None
        raise_for_gateway(response)

        return Profile(**response.json())
