from .notifications import (
    MessageResponse,
    SendConfirmationRequest,
    SubscribePublicRequest,
    SubscribeRequest,
    SubscriptionResponse,
    UnsubscribePublicRequest,
)

__all__ = [
    "MessageResponse",
    "SendConfirmationRequest",
    "SubscribePublicRequest",
    "SubscribeRequest",
    "SubscriptionResponse",
    "UnsubscribePublicRequest",
]
