"""
Tests for Email Service

Tests template rendering and SMTP delivery of the consent confirmation email.
"""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from notifications_api.exceptions import EmailDeliveryError
from notifications_api.services.email_service import EmailService, email_service, get_email_service
from notifications_api.services.email_templates import ConfirmConsentEmail


class TestEmailService:
    """Test email service functionality"""

    @pytest.fixture
    def mock_smtp(self):
        """Mock SMTP server"""
        with patch("notifications_api.services.email_service.smtplib.SMTP") as mock:
            smtp_instance = MagicMock()
            mock.return_value.__enter__.return_value = smtp_instance
            yield smtp_instance

    @pytest.fixture
    def email_svc(self):
        return EmailService()

    @pytest.fixture
    def confirm_email(self):
        return ConfirmConsentEmail(
            email="visitor@example.com", mail_hash="hash-value", app_url="https://charity.example.org/"
        )

    def test_singleton_is_returned_by_dependency(self):
        assert get_email_service() is email_service

    def test_confirm_links_carry_hash_and_email(self, confirm_email):
        assert confirm_email.context["subscribe_link"] == (
            "https://charity.example.org/notifications/subscribe?hash=hash-value&email=visitor%40example.com"
        )
        assert confirm_email.context["unsubscribe_link"].startswith(
            "https://charity.example.org/notifications/unsubscribe?"
        )

    def test_render_confirm_template(self, email_svc, confirm_email):
        html = email_svc.render(confirm_email)

        assert "visitor@example.com" in html
        assert "hash=hash-value" in html
        assert "Confirm subscription" in html

    def test_text_body_contains_subscribe_link(self, confirm_email):
        assert confirm_email.context["subscribe_link"] in confirm_email.text_body()

    def test_send_email_success(self, email_svc, mock_smtp):
        result = email_svc._send_email(
            to_email=["visitor@example.com"], subject="Test", html_body="<p>Hi</p>", text_body="Hi"
        )

        assert result is True
        mock_smtp.starttls.assert_called_once()
        mock_smtp.send_message.assert_called_once()
        message = mock_smtp.send_message.call_args.args[0]
        assert message["To"] == "visitor@example.com"
        assert message["Subject"] == "Test"

    def test_send_email_logs_in_with_credentials(self, email_svc, mock_smtp):
        email_svc.smtp_user = "mailer"
        email_svc.smtp_password = "secret"

        email_svc._send_email(to_email="visitor@example.com", subject="Test", html_body="<p>Hi</p>")

        mock_smtp.login.assert_called_once_with("mailer", "secret")

    def test_send_email_failure(self, email_svc):
        with patch("notifications_api.services.email_service.smtplib.SMTP") as mock:
            mock.side_effect = smtplib.SMTPException("SMTP error")

            result = email_svc._send_email(to_email="visitor@example.com", subject="Test", html_body="<p>Hi</p>")

        assert result is False

    async def test_send_from_template(self, email_svc, mock_smtp, confirm_email):
        result = await email_svc.send_from_template(confirm_email, to=["visitor@example.com"])

        assert result is True
        mock_smtp.send_message.assert_called_once()

    async def test_send_from_template_raises_on_failure(self, email_svc, confirm_email):
        with patch("notifications_api.services.email_service.smtplib.SMTP") as mock:
            mock.side_effect = ConnectionRefusedError()

            with pytest.raises(EmailDeliveryError):
                await email_svc.send_from_template(confirm_email, to=["visitor@example.com"])
