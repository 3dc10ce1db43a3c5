"""
Email template descriptors

Each descriptor names a Jinja2 template under ``templates/emails`` and
carries the subject, context and plain text fallback used to render it.
"""

from dataclasses import dataclass, field
from urllib.parse import urlencode

from notifications_api.config import settings


@dataclass
class EmailTemplate:
    name: str
    subject: str
    context: dict = field(default_factory=dict)

    def text_body(self) -> str | None:
        return None


class ConfirmConsentEmail(EmailTemplate):
    """Double opt-in email carrying the possession-proof hash."""

    def __init__(self, email: str, mail_hash: str, app_url: str | None = None):
        base_url = (app_url or settings.app_url).rstrip("/")
        query = urlencode({"hash": mail_hash, "email": email})
        super().__init__(
            name="confirm_consent.html",
            subject=f"Confirm your subscription - {settings.app_name}",
            context={
                "email": email,
                "app_name": settings.app_name,
                "subscribe_link": f"{base_url}/notifications/subscribe?{query}",
                "unsubscribe_link": f"{base_url}/notifications/unsubscribe?{query}",
            },
        )

    def text_body(self) -> str:
        return f"""
        Hello,

        Please confirm that you want to receive news from {self.context["app_name"]}:
        {self.context["subscribe_link"]}

        If you did not request this, ignore this email or opt out here:
        {self.context["unsubscribe_link"]}

        Best regards,
        The {self.context["app_name"]} Team
        """
