"""
Email send ledger.

One row per (email, type); ``date_sent`` is refreshed on every resend and
drives the confirmation cooldown.
"""

import enum

from sqlalchemy import Column, DateTime, Enum, Index, Integer, String

from notifications_api.database import Base
from notifications_api.utils.clock import utcnow


class EmailType(str, enum.Enum):
    """Kinds of tracked emails."""

    confirmConsent = "confirmConsent"


class EmailSentRegistry(Base):
    __tablename__ = "email_sent_registry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False)
    type = Column(Enum(EmailType), nullable=False)
    date_sent = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (Index("ix_email_sent_registry_email_type", "email", "type", unique=True),)

    def __repr__(self) -> str:
        return f"<EmailSentRegistry(email={self.email}, type={self.type}, date_sent={self.date_sent})>"
