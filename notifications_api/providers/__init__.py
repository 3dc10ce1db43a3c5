from .notifications_provider import ContactsToListParams, MarketingContact, NotificationsProvider
from .sendgrid_provider import SendGridNotificationsProvider, get_notifications_provider

__all__ = [
    "ContactsToListParams",
    "MarketingContact",
    "NotificationsProvider",
    "SendGridNotificationsProvider",
    "get_notifications_provider",
]
