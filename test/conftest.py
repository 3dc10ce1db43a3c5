"""
Pytest configuration and fixtures for the notifications API tests
"""

import os
import sys
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from notifications_api.database import Base  # noqa: E402
from notifications_api.models import Campaign, NotificationList, Person, UnregisteredNotificationConsent  # noqa: E402
from notifications_api.services.campaign_service import CampaignService  # noqa: E402
from notifications_api.services.email_registry_service import EmailRegistryService  # noqa: E402
from notifications_api.services.email_service import EmailService  # noqa: E402
from notifications_api.services.marketing_notifications_service import MarketingNotificationsService  # noqa: E402
from notifications_api.services.person_service import PersonService, UnregisteredConsentService  # noqa: E402

# Test database URL (SQLite in-memory for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

MARKETING_LIST_ID = "marketing_list_id"
TEST_HASH = "hash-value"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_test_database():
    """Create a fresh schema for each test function that needs it."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db(setup_test_database) -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
def email_service_mock():
    """Email service that records sends instead of talking to SMTP"""
    mock = MagicMock(spec=EmailService)
    mock.send_from_template = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def provider_mock():
    """Marketing provider double"""
    mock = MagicMock()
    mock.create_new_contact_list = AsyncMock(return_value="campaign-list-id")
    mock.add_contacts_to_list = AsyncMock(return_value="job-id")
    mock.add_to_unsubscribed = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def notifications_service(test_db, email_service_mock, provider_mock, monkeypatch):
    service = MarketingNotificationsService(
        people=PersonService(test_db),
        unregistered=UnregisteredConsentService(test_db),
        campaigns=CampaignService(test_db),
        email_registry=EmailRegistryService(test_db),
        email_service=email_service_mock,
        provider=provider_mock,
        marketing_list_id=MARKETING_LIST_ID,
        cooldown_seconds=60,
        app_url="https://charity.example.org",
    )
    monkeypatch.setattr(service, "_generate_hash", lambda: TEST_HASH)
    return service


async def add_and_refresh(session: AsyncSession, instance):
    session.add(instance)
    await session.commit()
    await session.refresh(instance)
    return instance


@pytest.fixture
async def test_person(test_db: AsyncSession) -> Person:
    """Registered person without marketing consent"""
    return await add_and_refresh(
        test_db,
        Person(
            email="person@example.com",
            first_name="Ivan",
            last_name="Petrov",
            keycloak_id="keycloak-sub-1",
            mail_hash=TEST_HASH,
        ),
    )


@pytest.fixture
async def subscribed_person(test_db: AsyncSession) -> Person:
    return await add_and_refresh(
        test_db,
        Person(
            email="subscriber@example.com",
            first_name="Maria",
            last_name="Ivanova",
            keycloak_id="keycloak-sub-2",
            newsletter=True,
            mail_hash=TEST_HASH,
        ),
    )


@pytest.fixture
async def unregistered_consent(test_db: AsyncSession) -> UnregisteredNotificationConsent:
    """Visitor who requested a confirmation email but has not confirmed"""
    return await add_and_refresh(
        test_db,
        UnregisteredNotificationConsent(email="visitor@example.com", mail_hash=TEST_HASH),
    )


@pytest.fixture
async def test_campaign(test_db: AsyncSession) -> Campaign:
    return await add_and_refresh(test_db, Campaign(id="campaign-1", title="Winter Appeal", slug="winter-appeal"))


@pytest.fixture
async def campaign_with_list(test_db: AsyncSession, test_campaign: Campaign) -> Campaign:
    await add_and_refresh(
        test_db,
        NotificationList(id="existing-list-id", name=test_campaign.title, campaign_id=test_campaign.id),
    )
    await test_db.refresh(test_campaign)
    return test_campaign
