import logging

from ..core.security import StepValidationError, GatewayRejected, UnexpectedFailure
from ..gateway.base import GatewayError
from ..gateway.identity import IdentityGateway
from ..models.session import Session
from ..schemas.auth import (
    UserLogin, TokenResponse, EmailVerification, EmailConfirmationResponse,
    ConfirmationStatus
)
from ..schemas.common import Notification, ActionResponse

logger = logging.getLogger(__name__)

CONFIRMATION_TITLES = {
    ConfirmationStatus.SUCCESS: "Email Confirmed!",
    ConfirmationStatus.ERROR: "Confirmation Failed",
}

class AuthService:
    def __init__(self, identity: IdentityGateway):
        self.identity = identity

    async def authenticate_user(self, login_data: UserLogin) -> TokenResponse:
        """Sign in with email and password."""
        if not login_data.email or not login_data.password:
            raise StepValidationError("Missing Information", "Please fill in all required fields.")

        try:
            session = await self.identity.sign_in_with_password(
                login_data.email, login_data.password
            )
        except GatewayError as e:
            logger.warning(f"Login error for {login_data.email}: {e.message}")
            raise GatewayRejected("Login Failed", e.message)
        except Exception:
            logger.exception(f"Unexpected error during login for {login_data.email}")
            raise UnexpectedFailure()

        return TokenResponse.from_session(
            session,
            Notification(
                title="Login Successful!",
                description="Welcome back! Redirecting to your dashboard...",
            ),
            redirect_to="/",
        )

    async def refresh_access_token(self, refresh_token: str) -> TokenResponse:
        try:
            session = await self.identity.refresh_session(refresh_token)
        except GatewayError as e:
            raise GatewayRejected("Session Expired", e.message)
        except Exception:
            logger.exception("Unexpected error refreshing session")
            raise UnexpectedFailure()

        return TokenResponse.from_session(
            session,
            Notification(title="Session Refreshed", description="Your session has been extended."),
        )

    async def logout_user(self, session: Session) -> ActionResponse:
        try:
            await self.identity.sign_out(session)
        except Exception as e:
            logger.error(f"Logout error: {str(e)}")
            raise UnexpectedFailure("Failed to logout. Please try again.")

        return ActionResponse(
            notification=Notification(
                title="Logged out successfully",
                description="You have been logged out of your account.",
            ),
            redirect_to="/",
        )

    async def confirm_email(self, verification: EmailVerification) -> EmailConfirmationResponse:
        """Check the token from the confirmation link. Failures are reported, never raised."""
        if not verification.token_hash or verification.type != "email":
            return self._confirmation(ConfirmationStatus.ERROR, "Invalid confirmation link.")

        try:
            await self.identity.verify_otp(verification.token_hash, "email")
        except GatewayError as e:
            logger.warning(f"Email confirmation error: {e.message}")
            return self._confirmation(
                ConfirmationStatus.ERROR,
                "Failed to confirm email. The link may have expired or is invalid."
            )
        except Exception:
            logger.exception("Unexpected error during email confirmation")
            return self._confirmation(
                ConfirmationStatus.ERROR,
                "An unexpected error occurred. Please try again."
            )

        return self._confirmation(
            ConfirmationStatus.SUCCESS,
            "Your email has been confirmed successfully! You can now sign in to your account."
        )

    def _confirmation(self, status: ConfirmationStatus, message: str) -> EmailConfirmationResponse:
        if status == ConfirmationStatus.SUCCESS:
            links = {"Sign In": "/login"}
        else:
            links = {"Create Account": "/signup", "Back to Home": "/"}
        return EmailConfirmationResponse(
            status=status,
            title=CONFIRMATION_TITLES[status],
            message=message,
            links=links,
        )
