"""
Domain layer for the Evolution API client.

Read-only views over API payloads plus the ``Instance`` session wrapper.
"""

from .instance import ConnectionCheckResult, Instance
from .models import Chat, Contact, InstanceInfo, Message, MessageKey, Webhook

__all__ = [
    "Chat",
    "ConnectionCheckResult",
    "Contact",
    "Instance",
    "InstanceInfo",
    "Message",
    "MessageKey",
    "Webhook",
]
