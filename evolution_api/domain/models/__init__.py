"""Read-only view models over Evolution API payloads."""

from .base import PayloadView
from .chat import Chat
from .contact import Contact
from .instance_info import InstanceInfo
from .message import Message, MessageKey, classify_message
from .webhook import Webhook

__all__ = [
    "Chat",
    "Contact",
    "InstanceInfo",
    "Message",
    "MessageKey",
    "PayloadView",
    "Webhook",
    "classify_message",
]
