from pydantic_settings import BaseSettings
from typing import Optional, List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "HealthCare+ Portal"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")

    # Public origin of the portal, used to build email confirmation links
    SITE_URL: str = "http://localhost:8080"

    # Hosted backend (identity gateway, data store, object storage)
    GATEWAY_URL: str = os.getenv("GATEWAY_URL", "http://localhost:54321")
    GATEWAY_ANON_KEY: str = os.getenv("GATEWAY_ANON_KEY", "public-anon-key")
    GATEWAY_JWT_SECRET: Optional[str] = None
    GATEWAY_JWT_AUDIENCE: str = "authenticated"
    GATEWAY_TIMEOUT_SECONDS: float = 10.0

    # How long a session is trusted before the gateway is asked again
    SESSION_CACHE_SECONDS: float = 30.0

    # Storage buckets
    AVATAR_BUCKET: str = "avatars"
    LICENSE_BUCKET: str = "license-documents"

    # Onboarding drafts
    MIN_PASSWORD_LENGTH: int = 6
    DRAFT_TTL_MINUTES: int = 60

    # Redis (rate limiting)
    REDIS_URL: str = "redis://localhost:6379"
    RATE_LIMIT_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 3600

    # CORS and trusted hosts
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1", "*.localhost", "testserver"]
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080", "http://testserver"]

    @property
    def email_redirect_url(self) -> str:
        """Where the identity gateway sends users after they click the confirmation link."""
        return f"{self.SITE_URL.rstrip('/')}/email-confirmation"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
