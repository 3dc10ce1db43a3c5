"""
Email Service

Renders email templates and delivers them over SMTP.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from notifications_api.config import settings
from notifications_api.exceptions import EmailDeliveryError
from notifications_api.services.email_templates import EmailTemplate

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails with template support"""

    def __init__(self, template_dir: Path | None = None):
        """Initialize email service with Jinja2 template engine"""
        template_dir = template_dir or Path(__file__).parent.parent / "templates" / "emails"

        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.smtp_from = settings.smtp_from

    def _send_email(
        self,
        to_email: str | list[str],
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> bool:
        """
        Send an email using SMTP.

        Args:
            to_email: Recipient email address(es)
            subject: Email subject
            html_body: HTML email body
            text_body: Plain text email body (optional)

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = self.smtp_from
            msg["To"] = to_email if isinstance(to_email, str) else ", ".join(to_email)

            if text_body:
                msg.attach(MIMEText(text_body, "plain"))
            msg.attach(MIMEText(html_body, "html"))

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)

            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}': {e}")
            return False

    def render(self, template: EmailTemplate) -> str:
        return self.env.get_template(template.name).render(**template.context)

    async def send_from_template(self, template: EmailTemplate, to: list[str]) -> bool:
        """
        Render ``template`` and send it to every address in ``to``.

        Raises:
            EmailDeliveryError: if the SMTP delivery fails
        """
        html_body = self.render(template)
        sent = await asyncio.to_thread(
            self._send_email,
            to_email=to,
            subject=template.subject,
            html_body=html_body,
            text_body=template.text_body(),
        )
        if not sent:
            raise EmailDeliveryError()

        logger.info(f"Sent '{template.name}' email to {len(to)} recipient(s)")
        return True


# Singleton instance
email_service = EmailService()


def get_email_service() -> EmailService:
    return email_service
