from dataclasses import dataclass


@dataclass
class EmailTemplates:
    RSVP_NOTIFICATION_SUBJECT = 'New RSVP for "{event_title}" at {event_date}'
    RSVP_NOTIFICATION_HTML = """
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <p>{subject}:</p>
        <p><strong>Name:</strong> {rsvp_name}</p>
        <p><strong>Email:</strong> {rsvp_email}</p>
    </body>
    </html>
    """

    RSVP_NOTIFICATION_TEXT = """
    {subject}:

    Name: {rsvp_name}
    Email: {rsvp_email}
    """

    @classmethod
    def get_rsvp_notification_templates(
        cls, event_title: str, event_date: str
    ) -> tuple[str, str, str]:
        """Return (subject, html_template, text_template) for an admin RSVP notification."""
        subject = cls.RSVP_NOTIFICATION_SUBJECT.format(
            event_title=event_title,
            event_date=event_date,
        )
        return subject, cls.RSVP_NOTIFICATION_HTML, cls.RSVP_NOTIFICATION_TEXT
