"""
Marketing Notifications Service

Resolves email consent for registered people and unregistered visitors:
- Double opt-in confirmation emails with a resend cooldown
- Public confirmation through the emailed hash
- Subscription of authenticated users
- Opt-out through the emailed hash or while authenticated

A registered person always takes precedence over an unregistered record
for the same email, and a missing record counts as no consent.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta

from notifications_api.exceptions import ConsentRequiredError, InvalidCredentialError, PersonNotFoundError
from notifications_api.models.email_sent_registry import EmailType
from notifications_api.models.person import Person
from notifications_api.models.unregistered_consent import UnregisteredNotificationConsent
from notifications_api.providers.notifications_provider import MarketingContact, NotificationsProvider
from notifications_api.services.campaign_service import CampaignService
from notifications_api.services.email_registry_service import EmailRegistryService
from notifications_api.services.email_service import EmailService
from notifications_api.services.email_templates import ConfirmConsentEmail
from notifications_api.services.person_service import PersonService, UnregisteredConsentService
from notifications_api.utils.clock import utcnow

logger = logging.getLogger(__name__)

MESSAGE_SUBSCRIBED = "Subscribed"
MESSAGE_EMAIL_SENT = "Email Sent"


@dataclass
class TokenIdentity:
    """Claims of a verified access token."""

    sub: str
    email: str | None = None


class MarketingNotificationsService:
    def __init__(
        self,
        people: PersonService,
        unregistered: UnregisteredConsentService,
        campaigns: CampaignService,
        email_registry: EmailRegistryService,
        email_service: EmailService,
        provider: NotificationsProvider,
        marketing_list_id: str,
        cooldown_seconds: int = 60,
        app_url: str | None = None,
    ):
        self.people = people
        self.unregistered = unregistered
        self.campaigns = campaigns
        self.email_registry = email_registry
        self.email_service = email_service
        self.provider = provider
        self.marketing_list_id = marketing_list_id
        self.cooldown = timedelta(seconds=cooldown_seconds)
        self.app_url = app_url

    def _generate_hash(self) -> str:
        return secrets.token_urlsafe(32)

    # ============== Confirmation ==============

    async def send_confirmation(self, email: str) -> dict:
        """Send the double opt-in email unless the address already consented."""
        person = await self.people.find_by_email(email)
        if person and person.newsletter:
            return {"message": MESSAGE_SUBSCRIBED}

        consented = await self.unregistered.find(email, consent=True)
        if consented:
            return {"message": MESSAGE_SUBSCRIBED}

        last_send = await self.email_registry.find_last_send(email, EmailType.confirmConsent)
        now = utcnow()
        if last_send and now - last_send.date_sent < self.cooldown:
            logger.info(f"Confirmation email to {email} suppressed, last sent at {last_send.date_sent}")
            return {"message": MESSAGE_EMAIL_SENT}

        mail_hash = self._generate_hash()
        if person is None:
            await self.unregistered.upsert(email, mail_hash=mail_hash)
        else:
            await self.people.update(person, mail_hash=mail_hash)

        await self.email_service.send_from_template(
            ConfirmConsentEmail(email=email, mail_hash=mail_hash, app_url=self.app_url),
            to=[email],
        )

        if last_send:
            await self.email_registry.update_send(last_send.id, date_sent=now)
        else:
            await self.email_registry.create_send(email, EmailType.confirmConsent, date_sent=now)

        logger.info(f"Confirmation email sent to {email}")
        return {"message": MESSAGE_EMAIL_SENT}

    # ============== Subscription ==============

    async def subscribe_public(
        self,
        email: str,
        consent: bool,
        mail_hash: str,
        campaign_id: str | None = None,
    ) -> dict:
        """Confirm consent from an emailed link and register the contact."""
        person = await self.people.find_by_email_and_hash(email, mail_hash)
        if person and person.newsletter:
            return {"message": MESSAGE_SUBSCRIBED}

        unregistered = await self.unregistered.find(email, mail_hash=mail_hash)
        if person is None and unregistered is None:
            raise InvalidCredentialError()

        if person is None and unregistered.consent:
            return {"message": MESSAGE_SUBSCRIBED}

        if consent is not True:
            logger.info(f"Public subscription for {email} received without consent")
            return {"email": email, "subscribed": False}

        list_ids = [self.marketing_list_id]
        if campaign_id:
            campaign_list_id = await self._get_campaign_list_id(campaign_id)
            if campaign_list_id:
                list_ids.insert(0, campaign_list_id)

        await self.provider.add_contacts_to_list(
            {"contacts": [self._contact_for(email, person)], "list_ids": list_ids}
        )

        if person is not None:
            await self.people.update(person, newsletter=True)
        else:
            await self.unregistered.update(email, consent=True)

        logger.info(f"Subscribed {email} to marketing lists {list_ids}")
        return {"email": email, "subscribed": True}

    async def subscribe(self, identity: TokenIdentity, consent: bool) -> dict:
        """Subscribe the authenticated person to the main marketing list."""
        if consent is not True:
            raise ConsentRequiredError()

        person = await self._get_person(identity)

        await self.provider.add_contacts_to_list(
            {"contacts": [self._contact_for(person.email, person)], "list_ids": [self.marketing_list_id]}
        )
        await self.people.update(person, newsletter=True)

        logger.info(f"Subscribed person {person.id} to the main marketing list")
        return {"email": person.email, "subscribed": True}

    # ============== Opt-out ==============

    async def unsubscribe_public(self, email: str, mail_hash: str) -> dict:
        """Withdraw consent from an emailed link."""
        person = await self.people.find_by_email_and_hash(email, mail_hash)
        unregistered = None
        if person is None:
            unregistered = await self.unregistered.find(email, mail_hash=mail_hash)
            if unregistered is None:
                raise InvalidCredentialError()

        record: Person | UnregisteredNotificationConsent = person or unregistered
        if not self._has_consent(record):
            return {"email": email, "subscribed": False}

        await self.provider.add_to_unsubscribed([email])

        if person is not None:
            await self.people.update(person, newsletter=False)
        else:
            await self.unregistered.update(email, consent=False)

        logger.info(f"Unsubscribed {email} from marketing email")
        return {"email": email, "subscribed": False}

    async def unsubscribe(self, identity: TokenIdentity) -> dict:
        person = await self._get_person(identity)
        if not person.newsletter:
            return {"email": person.email, "subscribed": False}

        await self.provider.add_to_unsubscribed([person.email])
        await self.people.update(person, newsletter=False)

        logger.info(f"Unsubscribed person {person.id} from marketing email")
        return {"email": person.email, "subscribed": False}

    # ============== Helpers ==============

    async def _get_person(self, identity: TokenIdentity) -> Person:
        person = await self.people.find_by_keycloak_id(identity.sub)
        if person is None and identity.email:
            person = await self.people.find_by_email(identity.email)
        if person is None:
            raise PersonNotFoundError(identity.sub)
        return person

    async def _get_campaign_list_id(self, campaign_id: str) -> str | None:
        """Return the campaign's marketing list id, creating the list on first use."""
        campaign = await self.campaigns.find_with_lists(campaign_id)
        if campaign is None:
            logger.warning(f"Campaign {campaign_id} not found, subscribing to the main list only")
            return None

        if campaign.notification_lists:
            return campaign.notification_lists[0].id

        list_id = await self.provider.create_new_contact_list(campaign.title)
        await self.campaigns.create_notification_list(campaign.id, list_id, campaign.title)
        return list_id

    @staticmethod
    def _contact_for(email: str, person: Person | None) -> MarketingContact:
        return {
            "email": email,
            "first_name": person.first_name if person else "",
            "last_name": person.last_name if person else "",
        }

    @staticmethod
    def _has_consent(record: Person | UnregisteredNotificationConsent) -> bool:
        if isinstance(record, Person):
            return bool(record.newsletter)
        return bool(record.consent)
