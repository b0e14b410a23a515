"""
Core type definitions for the Evolution API client.

Enums for values the remote service reports as plain strings.
"""

from enum import Enum


class MessageType(str, Enum):
    """Classified message type, derived from the message payload sub-key."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    LOCATION = "location"
    CONTACT = "contact"
    BUTTON = "button"
    LIST = "list"
    REACTION = "reaction"
    STICKER = "sticker"
    UNKNOWN = "unknown"


class MessageStatus(str, Enum):
    """Delivery status values reported for outgoing messages."""

    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    READ = "read"
    FAILED = "failed"


class ConnectionState(str, Enum):
    """Connection states reported by the remote service."""

    OPEN = "open"
    CONNECTING = "connecting"
    CLOSE = "close"


class JidSuffix(str, Enum):
    """Identifier suffixes that denote the chat scope."""

    INDIVIDUAL = "@s.whatsapp.net"
    GROUP = "@g.us"
    BROADCAST = "@broadcast"


def jid_number(jid: str | None) -> str | None:
    """Return the local part of ``<local_part>@<suffix>``."""
    if not jid:
        return None
    return jid.split("@", 1)[0]
