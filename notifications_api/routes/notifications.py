"""
Notification Routes

API endpoints for marketing email consent.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notifications_api.auth import get_current_identity
from notifications_api.config import settings
from notifications_api.database import get_db
from notifications_api.providers.notifications_provider import NotificationsProvider
from notifications_api.providers.sendgrid_provider import get_notifications_provider
from notifications_api.schemas.notifications import (
    MessageResponse,
    SendConfirmationRequest,
    SubscribePublicRequest,
    SubscribeRequest,
    SubscriptionResponse,
    UnsubscribePublicRequest,
)
from notifications_api.services.campaign_service import CampaignService
from notifications_api.services.email_registry_service import EmailRegistryService
from notifications_api.services.email_service import EmailService, get_email_service
from notifications_api.services.marketing_notifications_service import (
    MarketingNotificationsService,
    TokenIdentity,
)
from notifications_api.services.person_service import PersonService, UnregisteredConsentService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_marketing_notifications_service(
    db: AsyncSession = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
    provider: NotificationsProvider = Depends(get_notifications_provider),
) -> MarketingNotificationsService:
    return MarketingNotificationsService(
        people=PersonService(db),
        unregistered=UnregisteredConsentService(db),
        campaigns=CampaignService(db),
        email_registry=EmailRegistryService(db),
        email_service=email_service,
        provider=provider,
        marketing_list_id=settings.sendgrid_marketing_list_id,
        cooldown_seconds=settings.confirmation_cooldown_seconds,
        app_url=settings.app_url,
    )


# ============== Public ==============


@router.post("/send-confirm-email", response_model=MessageResponse)
async def send_confirmation(
    data: SendConfirmationRequest,
    service: MarketingNotificationsService = Depends(get_marketing_notifications_service),
) -> dict:
    """
    Send a double opt-in email to the given address.

    Returns "Subscribed" when the address already consented.
    """
    return await service.send_confirmation(data.email)


@router.post("/public/subscribe", response_model=MessageResponse | SubscriptionResponse)
async def subscribe_public(
    data: SubscribePublicRequest,
    service: MarketingNotificationsService = Depends(get_marketing_notifications_service),
) -> dict:
    """
    Confirm a subscription with the hash from the confirmation email.

    When ``campaignId`` is given the contact is also added to the
    campaign's marketing list.
    """
    return await service.subscribe_public(
        email=data.email,
        consent=data.consent,
        mail_hash=data.hash,
        campaign_id=data.campaign_id,
    )


@router.post("/public/unsubscribe", response_model=SubscriptionResponse)
async def unsubscribe_public(
    data: UnsubscribePublicRequest,
    service: MarketingNotificationsService = Depends(get_marketing_notifications_service),
) -> dict:
    return await service.unsubscribe_public(email=data.email, mail_hash=data.hash)


# ============== Authenticated ==============


@router.post("/subscribe", response_model=SubscriptionResponse)
async def subscribe(
    data: SubscribeRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    service: MarketingNotificationsService = Depends(get_marketing_notifications_service),
) -> dict:
    """
    Subscribe the current user to the main marketing list.

    Consent must be explicitly true.
    """
    return await service.subscribe(identity, data.consent)


@router.post("/unsubscribe", response_model=SubscriptionResponse)
async def unsubscribe(
    identity: TokenIdentity = Depends(get_current_identity),
    service: MarketingNotificationsService = Depends(get_marketing_notifications_service),
) -> dict:
    return await service.unsubscribe(identity)
