from typing import Optional
import logging
import httpx

from .base import raise_for_gateway

logger = logging.getLogger(__name__)

class ObjectStorage:
    """Client for the hosted object-storage buckets."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def upload(self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store `data` at `bucket/path` and return the stored object's path."""
        headers = {"x-upsert": "false"}
        if content_type:
            headers["Content-Type"] = content_type

        response = await self.http.post(
            f"/storage/v1/object/{bucket}/{path}",
            content=data,
            headers=headers,
        )
        raise_for_gateway(response)

        logger.info(f"Uploaded {len(data)} bytes to {bucket}/{path}")
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        base_url = str(self.http.base_url).rstrip("/")
        return f"{base_url}/storage/v1/object/public/{bucket}/{path}"
