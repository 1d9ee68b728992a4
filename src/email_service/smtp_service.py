import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from src.email_service.base import EmailServiceBase


class SMTPEmailConfig(Protocol):
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    emails_from: str
    http_timeout_seconds: float


class SMTPEmailService(EmailServiceBase):
    def __init__(self, config: SMTPEmailConfig):
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.username = config.smtp_user
        self.password = config.smtp_password
        self.from_address = config.emails_from
        self.timeout = config.http_timeout_seconds

    def _create_message(
        self,
        to_addresses: list[str],
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = ", ".join(to_addresses)

        # Attach both plain text and HTML versions
        part1 = MIMEText(text_body, "plain")
        part2 = MIMEText(html_body, "html")
        msg.attach(part1)
        msg.attach(part2)

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.username and self.password:
                server.starttls()
                server.login(self.username, self.password)
            server.send_message(msg)

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

        msg = self._create_message(
            to_addresses=to_addresses,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
        )

        await asyncio.to_thread(self._send, msg)
