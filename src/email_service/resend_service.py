import logging
from typing import Protocol

import httpx

from src.email_service.base import EmailServiceBase

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailConfig(Protocol):
    resend_api_key: str
    emails_from: str
    http_timeout_seconds: float


class ResendEmailService(EmailServiceBase):
    def __init__(
        self,
        config: ResendEmailConfig,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self._http_client_class = http_client_class

    async def _send(
        self,
        to_addresses: list[str],
        subject: str,
        html_body: str,
        text_body: str,
    ) -> str | None:
        """Send email via Resend and return the Resend email id."""
        async with self._http_client_class(timeout=self._config.http_timeout_seconds) as client:
            response = await client.post(
                RESEND_EMAILS_URL,
                headers={
                    "Authorization": f"Bearer {self._config.resend_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self._config.emails_from,
                    "to": to_addresses,
                    "subject": subject,
                    "html": html_body,
                    "text": text_body,
                },
            )
            response.raise_for_status()

            resend_email_id = response.json().get("id")
            logger.info(f"Sent '{subject}' to {len(to_addresses)} recipient(s): {resend_email_id}")
            return resend_email_id

    async def send_rsvp_notification(
        self,
        to_addresses: list[str],
        event_title: str,
        event_date: str,
        rsvp_name: str,
        rsvp_email: str,
    ) -> None:
        subject, html_body, text_body = self.render_rsvp_notification(
            event_title=event_title,
            event_date=event_date,
            rsvp_name=rsvp_name,
            rsvp_email=rsvp_email,
        )

        await self._send(
            to_addresses=to_addresses,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )
