"""
UnregisteredNotificationConsent model.

Consent state for visitors without a platform account, keyed by email.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from notifications_api.database import Base
from notifications_api.utils.clock import utcnow


class UnregisteredNotificationConsent(Base):
    __tablename__ = "unregistered_notification_consents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    consent = Column(Boolean, default=False, nullable=False)
    mail_hash = Column(String(128), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("consent", False)
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<UnregisteredNotificationConsent(email={self.email}, consent={self.consent})>"
