"""Outbound email for household invitations (Resend-compatible HTTP API)."""

import logging
from html import escape

import httpx

from src.config import get_settings
from src.services.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

INVITATION_TEMPLATE = """
<html>
  <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2>Household Invitation</h2>
    <p>You've been invited to join <strong>{household_name}</strong>!</p>
    <p><a href="{invitation_url}">Accept Invitation</a></p>
    <p>If the link doesn't work, copy and paste this URL into your browser:</p>
    <p>{invitation_url}</p>
    <p>This invitation will expire in {expiry_days} days.</p>
  </body>
</html>
"""


class EmailService:
    """Sends invitation emails through the configured email API."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = get_settings()
        self.api_key = self.settings.resend_api_key
        self.base_url = self.settings.email_api_url.rstrip("/")
        self.sender = self.settings.email_from
        self.timeout = self.settings.email_timeout_seconds
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def invitation_url(self, invitation_id: str) -> str:
        base = self.settings.app_url.rstrip("/")
        return f"{base}/accept-invitation?invitation_id={invitation_id}"

    async def send_invitation(self, invitation_id: str, email: str, household_name: str) -> str:
        """Send an invitation email.

        Returns the provider's message id. Raises EmailDeliveryError when the
        service is not configured or the provider rejects the request.
        """
        if not self.is_configured:
            logger.warning("RESEND_API_KEY not configured, invitation email not sent")
            raise EmailDeliveryError("Email delivery is not configured")

        invitation_url = self.invitation_url(invitation_id)
        html = INVITATION_TEMPLATE.format(
            household_name=escape(household_name),
            invitation_url=escape(invitation_url),
            expiry_days=self.settings.invitation_expiry_days,
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/emails",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "from": self.sender,
                        "to": email,
                        "subject": f"You're invited to join {household_name}!",
                        "html": html,
                    },
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Email API rejected invitation {invitation_id}: "
                f"{e.response.status_code} {e.response.text}"
            )
            raise EmailDeliveryError(f"Email API returned {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Email delivery failed for invitation {invitation_id}: {e}")
            raise EmailDeliveryError("Email delivery failed") from e

        message_id = data.get("id", "") if isinstance(data, dict) else ""
        logger.info(f"Invitation email sent for {invitation_id} (message {message_id})")
        return message_id
