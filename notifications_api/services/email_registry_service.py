"""
Email send ledger

Tracks when each kind of email was last sent to an address.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notifications_api.models.email_sent_registry import EmailSentRegistry, EmailType
from notifications_api.utils.clock import utcnow


class EmailRegistryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_last_send(self, email: str, email_type: EmailType) -> EmailSentRegistry | None:
        result = await self.db.execute(
            select(EmailSentRegistry)
            .where(EmailSentRegistry.email == email, EmailSentRegistry.type == email_type)
            .order_by(EmailSentRegistry.date_sent.desc())
        )
        return result.scalars().first()

    async def create_send(
        self,
        email: str,
        email_type: EmailType,
        date_sent: datetime | None = None,
    ) -> EmailSentRegistry:
        record = EmailSentRegistry(email=email, type=email_type, date_sent=date_sent or utcnow())
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def update_send(self, record_id: int, date_sent: datetime | None = None) -> EmailSentRegistry | None:
        record = await self.db.get(EmailSentRegistry, record_id)
        if record is None:
            return None

        record.date_sent = date_sent or utcnow()
        await self.db.commit()
        await self.db.refresh(record)
        return record
