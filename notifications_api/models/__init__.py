from .campaign import Campaign, NotificationList
from .email_sent_registry import EmailSentRegistry, EmailType
from .person import Person
from .unregistered_consent import UnregisteredNotificationConsent

__all__ = [
    "Campaign",
    "NotificationList",
    "EmailSentRegistry",
    "EmailType",
    "Person",
    "UnregisteredNotificationConsent",
]
