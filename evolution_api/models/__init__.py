"""Request models for the Evolution API client."""

from .request_models import (
    ContactCard,
    CreateInstanceRequest,
    FindMessagesRequest,
    LocationMessageRequest,
    SetWebhookRequest,
)

__all__ = [
    "ContactCard",
    "CreateInstanceRequest",
    "FindMessagesRequest",
    "LocationMessageRequest",
    "SetWebhookRequest",
]
