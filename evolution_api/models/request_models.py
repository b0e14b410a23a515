"""
Request body models for Evolution API operations.

Pydantic schemas that shape outgoing JSON bodies. Optional fields left as
``None`` are dropped from the serialized body, never sent as ``null``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RequestBody(BaseModel):
    """Base class for outgoing bodies serialized with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the wire format, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateInstanceRequest(RequestBody):
    """Body for ``POST /instance/create``."""

    instance_name: str = Field(..., min_length=1, alias="instanceName")
    qrcode: bool = True
    number: str | None = None
    token: str | None = None
    webhook: str | None = None
    webhook_by_events: bool = Field(False, alias="webhookByEvents")
    webhook_base64: bool = Field(False, alias="webhookBase64")


class LocationMessageRequest(RequestBody):
    """Body for ``POST /message/sendLocation``."""

    number: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    description: str | None = None


class ContactCard(BaseModel):
    """One shared contact in a contact message."""

    number: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class FindMessagesRequest(RequestBody):
    """Body for ``POST /chat/findMessages``, filtered by chat JID."""

    remote_jid: str = Field(..., min_length=1, exclude=True)
    limit: int = Field(50, gt=0)
    cursor: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["where"] = {"key": {"remoteJid": self.remote_jid}}
        return payload


class SetWebhookRequest(RequestBody):
    """Body for ``POST /webhook/set``."""

    webhook: str = Field(..., min_length=1)
    events: list[str] | None = None
    webhook_base64: bool = Field(False, alias="webhookBase64")

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if not self.events:
            payload.pop("events", None)
        payload["webhookByEvents"] = bool(self.events)
        return payload
