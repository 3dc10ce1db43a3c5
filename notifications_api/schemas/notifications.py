"""
Notification consent schemas

Request bodies for the consent endpoints and the literal response shapes
they return.
"""

from pydantic import BaseModel, EmailStr, Field, StrictBool


class SendConfirmationRequest(BaseModel):
    """Request a confirmation email for an address"""

    email: EmailStr = Field(..., description="Address to confirm")


class SubscribePublicRequest(BaseModel):
    """Confirm a subscription from an emailed link"""

    email: EmailStr
    consent: StrictBool
    hash: str = Field(..., min_length=1, description="Token mailed with the confirmation link")
    campaign_id: str | None = Field(None, alias="campaignId")

    model_config = {"populate_by_name": True}


class SubscribeRequest(BaseModel):
    """Subscribe the authenticated user"""

    consent: StrictBool


class UnsubscribePublicRequest(BaseModel):
    """Withdraw consent from an emailed link"""

    email: EmailStr
    hash: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


class SubscriptionResponse(BaseModel):
    email: str
    subscribed: bool
