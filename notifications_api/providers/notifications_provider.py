"""
Marketing list provider interface.

Any email-marketing platform holding the main list and the per-campaign
lists implements this protocol.
"""

from typing import Protocol, TypedDict


class MarketingContact(TypedDict):
    email: str
    first_name: str
    last_name: str


class ContactsToListParams(TypedDict):
    contacts: list[MarketingContact]
    list_ids: list[str]


class NotificationsProvider(Protocol):
    async def create_new_contact_list(self, name: str) -> str:
        """Create a contact list and return its external id."""
        ...

    async def add_contacts_to_list(self, params: ContactsToListParams) -> str:
        """Add or update contacts on the given lists. Returns the provider job id."""
        ...

    async def add_to_unsubscribed(self, emails: list[str]) -> None:
        """Suppress marketing email to the given addresses."""
        ...
