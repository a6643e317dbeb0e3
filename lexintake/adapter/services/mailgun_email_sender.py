import logging
from html import escape
from typing import Optional

import httpx

from lexintake.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)

MAILGUN_API_BASE = "https://api.mailgun.net/v3"


class MailgunEmailSender(IEmailSender):
    def __init__(
        self,
        api_key: str,
        domain: str,
        from_email: str,
        app_url: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.domain = domain
        self.from_email = from_email
        self.app_url = app_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _send(self, to: str, subject: str, html: str) -> bool:
        data = {"from": self.from_email, "to": to, "subject": subject, "html": html}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{MAILGUN_API_BASE}/{self.domain}/messages",
                    auth=("api", self.api_key),
                    data=data,
                )
                response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.error(f"[EMAIL] Mailgun send to {to} failed: {e!r}")
            return False

    async def send_welcome_email(self, email: str, firm_name: str) -> bool:
        name = escape(firm_name)
        html = (
            "<h2>Welcome to LexIntake</h2>"
            f"<p>Hi {name},</p>"
            "<p>Thanks for signing up. We're excited to help streamline your client intake process.</p>"
            f'<p><a href="{self.app_url}/auth/signin">Get Started</a></p>'
        )
        return await self._send(email, f"Welcome to LexIntake, {firm_name}", html)
