"""
SendGrid Marketing Campaigns provider

Talks to the SendGrid v3 API with httpx. Every non-2xx response or
transport failure is raised as MarketingProviderError.
"""

import logging

import httpx

from notifications_api.config import settings
from notifications_api.exceptions import MarketingProviderError
from notifications_api.providers.notifications_provider import ContactsToListParams

logger = logging.getLogger(__name__)


class SendGridNotificationsProvider:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.sendgrid.com",
        timeout: float = 10.0,
        unsubscribe_group_id: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.unsubscribe_group_id = unsubscribe_group_id
        self._transport = transport

    async def _request(self, method: str, path: str, payload: dict) -> dict:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"SendGrid {method} {path} timed out")
            raise MarketingProviderError("Marketing provider request timed out") from e
        except httpx.RequestError as e:
            logger.error(f"SendGrid {method} {path} failed: {e}")
            raise MarketingProviderError(f"Marketing provider request error: {e}") from e

        if not response.is_success:
            logger.error(f"SendGrid {method} {path} returned {response.status_code}: {response.text[:500]}")
            raise MarketingProviderError(f"Marketing provider returned HTTP {response.status_code}")

        if not response.content:
            return {}
        return response.json()

    async def create_new_contact_list(self, name: str) -> str:
        data = await self._request("POST", "/v3/marketing/lists", {"name": name})
        list_id = data.get("id")
        if not list_id:
            raise MarketingProviderError("Marketing provider did not return a list id")

        logger.info(f"Created SendGrid contact list '{name}' ({list_id})")
        return list_id

    async def add_contacts_to_list(self, params: ContactsToListParams) -> str:
        data = await self._request(
            "PUT",
            "/v3/marketing/contacts",
            {"list_ids": params["list_ids"], "contacts": params["contacts"]},
        )
        job_id = data.get("job_id", "")
        logger.info(
            f"Queued {len(params['contacts'])} contact(s) for lists {params['list_ids']} (job {job_id})"
        )
        return job_id

    async def add_to_unsubscribed(self, emails: list[str]) -> None:
        if self.unsubscribe_group_id is not None:
            path = f"/v3/asm/groups/{self.unsubscribe_group_id}/suppressions"
        else:
            path = "/v3/asm/suppressions/global"

        await self._request("POST", path, {"recipient_emails": emails})
        logger.info(f"Suppressed marketing email for {len(emails)} address(es)")


def get_notifications_provider() -> SendGridNotificationsProvider:
    return SendGridNotificationsProvider(
        api_key=settings.sendgrid_api_key,
        base_url=settings.sendgrid_base_url,
        timeout=settings.sendgrid_timeout_seconds,
        unsubscribe_group_id=settings.sendgrid_unsubscribe_group_id,
    )
