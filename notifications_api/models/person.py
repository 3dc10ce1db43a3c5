"""
Person model.

A registered platform user. ``newsletter`` holds the marketing consent flag
and ``mail_hash`` the last possession-proof token mailed to the address.
"""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String

from notifications_api.database import Base
from notifications_api.utils.clock import utcnow


class Person(Base):
    __tablename__ = "people"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")

    # Subject of the identity provider's access token
    keycloak_id = Column(String(64), unique=True, nullable=True, index=True)

    newsletter = Column(Boolean, default=False, nullable=False)
    mail_hash = Column(String(128), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __init__(self, **kwargs):
        # Column defaults only apply at INSERT time
        kwargs.setdefault("newsletter", False)
        kwargs.setdefault("first_name", "")
        kwargs.setdefault("last_name", "")
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, email={self.email}, newsletter={self.newsletter})>"
