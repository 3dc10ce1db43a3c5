"""
Campaign lookup

Resolves campaigns and the marketing lists attached to them.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from notifications_api.models.campaign import Campaign, NotificationList

logger = logging.getLogger(__name__)


class CampaignService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_with_lists(self, campaign_id: str) -> Campaign | None:
        """Get a campaign together with its notification lists."""
        result = await self.db.execute(
            select(Campaign).options(selectinload(Campaign.notification_lists)).where(Campaign.id == campaign_id)
        )
        return result.scalars().first()

    async def create_notification_list(self, campaign_id: str, list_id: str, name: str) -> NotificationList:
        """Persist a marketing list already created at the provider."""
        notification_list = NotificationList(id=list_id, name=name, campaign_id=campaign_id)
        self.db.add(notification_list)
        await self.db.commit()
        await self.db.refresh(notification_list)

        logger.info(f"Created notification list {list_id} for campaign {campaign_id}")
        return notification_list
