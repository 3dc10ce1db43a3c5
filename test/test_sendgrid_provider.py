"""
Tests for the SendGrid marketing provider

Requests are answered by an httpx.MockTransport so the payloads sent to
SendGrid can be inspected.
"""

import json

import httpx
import pytest

from notifications_api.exceptions import MarketingProviderError
from notifications_api.providers.sendgrid_provider import SendGridNotificationsProvider


def make_provider(handler, **kwargs) -> tuple[SendGridNotificationsProvider, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    provider = SendGridNotificationsProvider(
        api_key="sg-test-key",
        base_url="https://sendgrid.test",
        transport=httpx.MockTransport(record),
        **kwargs,
    )
    return provider, requests


class TestSendGridProvider:
    async def test_create_new_contact_list(self):
        provider, requests = make_provider(lambda request: httpx.Response(201, json={"id": "list-123", "name": "Winter"}))

        list_id = await provider.create_new_contact_list("Winter")

        assert list_id == "list-123"
        assert requests[0].method == "POST"
        assert requests[0].url.path == "/v3/marketing/lists"
        assert requests[0].headers["Authorization"] == "Bearer sg-test-key"
        assert json.loads(requests[0].content) == {"name": "Winter"}

    async def test_create_list_without_id_fails(self):
        provider, _ = make_provider(lambda request: httpx.Response(201, json={}))

        with pytest.raises(MarketingProviderError):
            await provider.create_new_contact_list("Winter")

    async def test_add_contacts_to_list(self):
        provider, requests = make_provider(lambda request: httpx.Response(202, json={"job_id": "job-1"}))
        contact = {"email": "visitor@example.com", "first_name": "", "last_name": ""}

        job_id = await provider.add_contacts_to_list({"contacts": [contact], "list_ids": ["a", "b"]})

        assert job_id == "job-1"
        assert requests[0].method == "PUT"
        assert requests[0].url.path == "/v3/marketing/contacts"
        assert json.loads(requests[0].content) == {"list_ids": ["a", "b"], "contacts": [contact]}

    async def test_add_to_unsubscribed_uses_global_suppressions(self):
        provider, requests = make_provider(lambda request: httpx.Response(201, json={"recipient_emails": []}))

        await provider.add_to_unsubscribed(["visitor@example.com"])

        assert requests[0].url.path == "/v3/asm/suppressions/global"
        assert json.loads(requests[0].content) == {"recipient_emails": ["visitor@example.com"]}

    async def test_add_to_unsubscribed_uses_group_when_configured(self):
        provider, requests = make_provider(lambda request: httpx.Response(201), unsubscribe_group_id=42)

        await provider.add_to_unsubscribed(["visitor@example.com"])

        assert requests[0].url.path == "/v3/asm/groups/42/suppressions"

    async def test_error_status_raises_provider_error(self):
        provider, _ = make_provider(lambda request: httpx.Response(400, json={"errors": [{"message": "bad"}]}))

        with pytest.raises(MarketingProviderError) as exc_info:
            await provider.add_contacts_to_list({"contacts": [], "list_ids": ["a"]})

        assert exc_info.value.status_code == 502
        assert "400" in exc_info.value.message

    async def test_transport_error_raises_provider_error(self):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider, _ = make_provider(fail)

        with pytest.raises(MarketingProviderError):
            await provider.create_new_contact_list("Winter")

    async def test_timeout_raises_provider_error(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider, _ = make_provider(slow)

        with pytest.raises(MarketingProviderError) as exc_info:
            await provider.add_to_unsubscribed(["visitor@example.com"])

        assert exc_info.value.message == "Marketing provider request timed out"
