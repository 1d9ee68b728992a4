from abc import ABC, abstractmethod
from html import escape

from src.email_service.templates import EmailTemplates


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_rsvp_notification(
        self,
        to_addresses: list[str],
        event_title: str,
        event_date: str,
        rsvp_name: str,
        rsvp_email: str,
    ) -> None:
        pass

    @staticmethod
    def render_rsvp_notification(
        event_title: str,
        event_date: str,
        rsvp_name: str,
        rsvp_email: str,
    ) -> tuple[str, str, str]:
        """Return (subject, html_body, text_body); user supplied values are escaped in HTML."""
        subject, html_template, text_template = EmailTemplates.get_rsvp_notification_templates(
            event_title=event_title,
            event_date=event_date,
        )
        html_body = html_template.format(
            subject=escape(subject),
            rsvp_name=escape(rsvp_name),
            rsvp_email=escape(rsvp_email),
        )
        text_body = text_template.format(
            subject=subject,
            rsvp_name=rsvp_name,
            rsvp_email=rsvp_email,
        )
        return subject, html_body, text_body
