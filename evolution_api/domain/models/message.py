"""
Message view over a stored or received message payload.

The message type is resolved once, at construction, from the first matching
sub-key of the ``message`` object.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from evolution_api.core.types import JidSuffix, MessageStatus, MessageType, jid_number
from evolution_api.domain.models.base import PayloadView

# Checked in order; the first present key wins.
MESSAGE_TYPE_KEYS: tuple[tuple[MessageType, tuple[str, ...]], ...] = (
    (MessageType.TEXT, ("conversation", "extendedTextMessage")),
    (MessageType.IMAGE, ("imageMessage",)),
    (MessageType.AUDIO, ("audioMessage",)),
    (MessageType.VIDEO, ("videoMessage",)),
    (MessageType.DOCUMENT, ("documentMessage",)),
    (MessageType.LOCATION, ("locationMessage",)),
    (MessageType.CONTACT, ("contactMessage",)),
    (MessageType.BUTTON, ("buttonsResponseMessage", "buttonMessage")),
    (MessageType.LIST, ("listResponseMessage", "listMessage")),
    (MessageType.REACTION, ("reactionMessage",)),
    (MessageType.STICKER, ("stickerMessage",)),
)


def classify_message(content: Any) -> tuple[MessageType, str | None]:
    """Return the message type and the sub-key that decided it."""
    if isinstance(content, dict):
        for message_type, keys in MESSAGE_TYPE_KEYS:
            for key in keys:
                if key in content:
                    return message_type, key
    return MessageType.UNKNOWN, None


class MessageKey(BaseModel):
    """Message key identifying chat, direction and id."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    remote_jid: str | None = Field(None, alias="remoteJid")
    from_me: bool = Field(False, alias="fromMe")
    id: str | None = None


class Message(PayloadView):
    """Read-only projection of a message payload."""

    id: str | None = None
    key: MessageKey = Field(default_factory=MessageKey)
    message: dict[str, Any] | None = None
    message_timestamp: int | None = Field(None, alias="messageTimestamp")
    status: str | None = None
    participant: str | None = None

    message_type: MessageType = MessageType.UNKNOWN
    content_key: str | None = None

    @field_validator("message_timestamp", mode="before")
    @classmethod
    def coerce_long_timestamp(cls, v: Any) -> Any:
        # 64-bit values may arrive split as {"low", "high", "unsigned"} 32-bit halves
        if isinstance(v, dict) and "low" in v:
            return (int(v.get("high") or 0) << 32) + (int(v["low"]) & 0xFFFFFFFF)
        return v

    @model_validator(mode="before")
    @classmethod
    def resolve_message_type(cls, data: Any) -> Any:
        if isinstance(data, dict):
            message_type, content_key = classify_message(data.get("message"))
            data = {**data, "message_type": message_type, "content_key": content_key}
        return data

    @property
    def type(self) -> MessageType:
        return self.message_type

    @property
    def content(self) -> Any:
        """Payload of the sub-key that decided the message type."""
        if self.content_key is None or self.message is None:
            return None
        return self.message[self.content_key]

    def _content_for(self, message_type: MessageType) -> Any:
        return self.content if self.message_type is message_type else None

    @property
    def text(self) -> str | None:
        if self.message_type is not MessageType.TEXT:
            return None
        if self.content_key == "conversation":
            return self.content
        extended = self.content or {}
        return extended.get("text") if isinstance(extended, dict) else None

    @property
    def image(self) -> Any:
        return self._content_for(MessageType.IMAGE)

    @property
    def audio(self) -> Any:
        return self._content_for(MessageType.AUDIO)

    @property
    def video(self) -> Any:
        return self._content_for(MessageType.VIDEO)

    @property
    def document(self) -> Any:
        return self._content_for(MessageType.DOCUMENT)

    @property
    def location(self) -> Any:
        return self._content_for(MessageType.LOCATION)

    @property
    def contact(self) -> Any:
        return self._content_for(MessageType.CONTACT)

    @property
    def button(self) -> Any:
        return self._content_for(MessageType.BUTTON)

    @property
    def list(self) -> Any:
        return self._content_for(MessageType.LIST)

    @property
    def reaction(self) -> Any:
        return self._content_for(MessageType.REACTION)

    @property
    def sticker(self) -> Any:
        return self._content_for(MessageType.STICKER)

    @property
    def sender(self) -> str | None:
        """Number of the chat the message belongs to."""
        return jid_number(self.key.remote_jid)

    @property
    def message_id(self) -> str | None:
        return self.key.id

    @property
    def from_me(self) -> bool:
        return self.key.from_me

    @property
    def is_group(self) -> bool:
        return bool(self.key.remote_jid) and JidSuffix.GROUP.value in self.key.remote_jid

    @property
    def is_broadcast(self) -> bool:
        return (
            bool(self.key.remote_jid)
            and JidSuffix.BROADCAST.value in self.key.remote_jid
        )

    @property
    def is_private(self) -> bool:
        return not self.is_group and not self.is_broadcast

    @property
    def timestamp(self) -> datetime | None:
        if self.message_timestamp is None:
            return None
        return datetime.fromtimestamp(self.message_timestamp, tz=timezone.utc)

    def _has_status(self, status: MessageStatus) -> bool:
        return (self.status or "").lower() == status.value

    @property
    def is_read(self) -> bool:
        return self._has_status(MessageStatus.READ)

    @property
    def is_delivered(self) -> bool:
        return self._has_status(MessageStatus.DELIVERED)

    @property
    def is_sent(self) -> bool:
        return self._has_status(MessageStatus.SENT)

    @property
    def is_failed(self) -> bool:
        return self._has_status(MessageStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key.model_dump(by_alias=True),
            "message": self.message,
            "message_timestamp": self.message_timestamp,
            "status": self.status,
            "participant": self.participant,
            "instance_name": self.instance_name,
            "type": self.message_type.value,
            "from": self.sender,
            "from_me": self.from_me,
            "group": self.is_group,
            "timestamp": self.timestamp,
            "text": self.text,
        }
