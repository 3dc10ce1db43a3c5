"""
Campaign and NotificationList models.

A campaign owns the marketing lists its followers are added to. The
NotificationList primary key is the list id issued by the marketing provider.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from notifications_api.database import Base
from notifications_api.utils.clock import utcnow


class Campaign(Base):
    __tablename__ = "campaigns"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    notification_lists = relationship(
        "NotificationList",
        back_populates="campaign",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Campaign(id={self.id}, slug={self.slug})>"


class NotificationList(Base):
    __tablename__ = "notification_lists"

    # External marketing list id
    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    campaign_id = Column(String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    campaign = relationship("Campaign", back_populates="notification_lists")

    def __repr__(self) -> str:
        return f"<NotificationList(id={self.id}, campaign={self.campaign_id})>"
