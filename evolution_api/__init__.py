"""
evolution_api - Python client for the Evolution messaging API.

Wraps the REST endpoints for instances, messages, chats, contacts and webhooks
behind a synchronous client with bounded retry and typed errors.

Example:
    from evolution_api import EvolutionClient, EvolutionConfig

    client = EvolutionClient(EvolutionConfig(api_key="secret"))
    bot = client.instance("bot1")
    bot.send_text("5511999999999", "Hello!")
"""

from .client import EvolutionClient, HttpTransport
from .core.config.settings import EvolutionConfig, Settings, get_package_version
from .core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConnectionError,
    EvolutionAPIError,
    InstanceNotConnectedError,
    InvalidNumberError,
    NotFoundError,
    ProtocolError,
    QRCodeExpiredError,
    RateLimitError,
    ResponseEnvelope,
    ServerError,
    TimeoutError,
    UnexpectedStatusError,
    ValidationError,
)
from .core.factory import ClientFactory
from .core.types import MessageType
from .domain import (
    Chat,
    ConnectionCheckResult,
    Contact,
    Instance,
    InstanceInfo,
    Message,
    Webhook,
)

__version__ = get_package_version()

__all__ = [
    # Client
    "ClientFactory",
    "EvolutionClient",
    "EvolutionConfig",
    "HttpTransport",
    "Settings",
    # Domain
    "Chat",
    "ConnectionCheckResult",
    "Contact",
    "Instance",
    "InstanceInfo",
    "Message",
    "MessageType",
    "Webhook",
    # Errors
    "AuthenticationError",
    "AuthorizationError",
    "ConnectionError",
    "EvolutionAPIError",
    "InstanceNotConnectedError",
    "InvalidNumberError",
    "NotFoundError",
    "ProtocolError",
    "QRCodeExpiredError",
    "RateLimitError",
    "ResponseEnvelope",
    "ServerError",
    "TimeoutError",
    "UnexpectedStatusError",
    "ValidationError",
]
