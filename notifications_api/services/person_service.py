"""
Person and consent store

Lookups and updates for registered people and for the consent records of
unregistered visitors.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notifications_api.models.person import Person
from notifications_api.models.unregistered_consent import UnregisteredNotificationConsent

logger = logging.getLogger(__name__)


class PersonService:
    """Registered people."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Person | None:
        result = await self.db.execute(select(Person).where(Person.email == email))
        return result.scalars().first()

    async def find_by_email_and_hash(self, email: str, mail_hash: str) -> Person | None:
        result = await self.db.execute(select(Person).where(Person.email == email, Person.mail_hash == mail_hash))
        return result.scalars().first()

    async def find_by_keycloak_id(self, keycloak_id: str) -> Person | None:
        result = await self.db.execute(select(Person).where(Person.keycloak_id == keycloak_id))
        return result.scalars().first()

    async def update(self, person: Person, **fields) -> Person:
        """Set the given columns on a person and commit."""
        for key, value in fields.items():
            setattr(person, key, value)
        await self.db.commit()
        await self.db.refresh(person)
        logger.debug(f"Updated person {person.id}: {sorted(fields)}")
        return person


class UnregisteredConsentService:
    """Consent records of visitors without an account."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(
        self,
        email: str,
        mail_hash: str | None = None,
        consent: bool | None = None,
    ) -> UnregisteredNotificationConsent | None:
        """Find a record by email, optionally narrowed by hash and consent."""
        query = select(UnregisteredNotificationConsent).where(UnregisteredNotificationConsent.email == email)
        if mail_hash is not None:
            query = query.where(UnregisteredNotificationConsent.mail_hash == mail_hash)
        if consent is not None:
            query = query.where(UnregisteredNotificationConsent.consent.is_(consent))

        result = await self.db.execute(query)
        return result.scalars().first()

    async def upsert(self, email: str, **fields) -> UnregisteredNotificationConsent:
        """Create the record for ``email`` or update the existing one."""
        record = await self.find(email)
        if record is None:
            record = UnregisteredNotificationConsent(email=email, **fields)
            self.db.add(record)
        else:
            for key, value in fields.items():
                setattr(record, key, value)

        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def update(self, email: str, **fields) -> UnregisteredNotificationConsent | None:
        record = await self.find(email)
        if record is None:
            return None

        for key, value in fields.items():
            setattr(record, key, value)
        await self.db.commit()
        await self.db.refresh(record)
        return record
