"""
Instance session wrapper.

Binds an instance name to an ``EvolutionClient`` and re-exposes every resource
operation without the name argument.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from evolution_api.core.errors import InstanceNotConnectedError
from evolution_api.core.logging.context import instance_context
from evolution_api.core.logging.logger import get_logger
from evolution_api.domain.models.instance_info import InstanceInfo

if TYPE_CHECKING:
    from evolution_api.client.evolution_client import EvolutionClient


class ConnectionCheckResult(BaseModel):
    """Outcome of a connection-state check.

    ``success`` is False when the state could not be fetched at all; ``error``
    then holds the failure. A successful fetch of a closed instance has
    ``success=True`` and ``connected=False``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool
    state: str | None = None
    info: InstanceInfo | None = None
    error: Exception | None = None

    @property
    def connected(self) -> bool:
        return self.success and self.info is not None and self.info.is_open


class Instance:
    """
    Session wrapper for one remote instance.

    Example:
        bot = client.instance("bot1")
        if bot.is_connected():
            bot.send_text("5511999999999", "Hello!")
    """

    def __init__(self, name: str, client: "EvolutionClient"):
        self.name = name
        self.client = client
        self.logger = get_logger(__name__).bind(instance_name=name)

    def __repr__(self) -> str:
        return f"Instance(name={self.name!r})"

    # ==================== Lifecycle ====================

    def info(self) -> Any:
        return self.client.get_instance(self.name)

    def connect(self) -> Any:
        return self.client.connect_instance(self.name)

    def disconnect(self) -> Any:
        return self.client.disconnect_instance(self.name)

    def delete(self) -> Any:
        return self.client.delete_instance(self.name)

    def restart(self) -> Any:
        return self.client.restart_instance(self.name)

    def connection_state(self) -> Any:
        return self.client.get_connection_state(self.name)

    def qr_code(self) -> Any:
        return self.client.get_qr_code(self.name)

    def check_connection(self) -> ConnectionCheckResult:
        """Fetch the instance and report whether its state is ``open``.

        Every failure is captured in the result instead of being raised.
        """
        with instance_context(self.name):
            try:
                payload = self.info()
                if not isinstance(payload, dict):
                    return ConnectionCheckResult(success=True)
                info = InstanceInfo.from_payload(payload, self.name)
            except Exception as exc:
                self.logger.warning(f"Connection check failed: {exc}")
                return ConnectionCheckResult(success=False, error=exc)

        return ConnectionCheckResult(
            success=True, state=info.connection_status, info=info
        )

    def is_connected(self) -> bool:
        """True only when the instance is confirmed ``open``.

        Collapses any failure to False; use ``check_connection`` to see why.
        """
        return self.check_connection().connected

    def require_connected(self) -> InstanceInfo:
        """Return the instance info, raising when it is not ``open``.

        Raises:
            InstanceNotConnectedError: If the state is not ``open`` or unknown
        """
        result = self.check_connection()
        if not result.connected:
            raise InstanceNotConnectedError(self.name) from result.error
        return result.info

    # ==================== Messages ====================

    def send_text(self, number: str, text: str, options: dict | None = None) -> Any:
        return self.client.send_text_message(self.name, number, text, options)

    def send_image(
        self,
        number: str,
        image_url: str,
        caption: str | None = None,
        options: dict | None = None,
    ) -> Any:
        return self.client.send_image_message(
            self.name, number, image_url, caption, options
        )

    def send_audio(self, number: str, audio_url: str, options: dict | None = None) -> Any:
        return self.client.send_audio_message(self.name, number, audio_url, options)

    def send_video(
        self,
        number: str,
        video_url: str,
        caption: str | None = None,
        options: dict | None = None,
    ) -> Any:
        return self.client.send_video_message(
            self.name, number, video_url, caption, options
        )

    def send_document(
        self,
        number: str,
        document_url: str,
        caption: str | None = None,
        options: dict | None = None,
    ) -> Any:
        return self.client.send_document_message(
            self.name, number, document_url, caption, options
        )

    def send_location(
        self,
        number: str,
        latitude: float,
        longitude: float,
        description: str | None = None,
    ) -> Any:
        return self.client.send_location_message(
            self.name, number, latitude, longitude, description
        )

    def send_contact(self, number: str, contact_number: str, contact_name: str) -> Any:
        return self.client.send_contact_message(
            self.name, number, contact_number, contact_name
        )

    def send_button(
        self, number: str, title: str, description: str, buttons: list[dict]
    ) -> Any:
        return self.client.send_button_message(
            self.name, number, title, description, buttons
        )

    def send_list(
        self, number: str, title: str, description: str, sections: list[dict]
    ) -> Any:
        return self.client.send_list_message(
            self.name, number, title, description, sections
        )

    # ==================== Chats ====================

    def chats(self) -> Any:
        return self.client.get_chats(self.name)

    def messages(
        self, remote_jid: str, limit: int = 50, cursor: str | None = None
    ) -> Any:
        return self.client.get_messages(self.name, remote_jid, limit, cursor)

    def mark_as_read(self, number: str) -> Any:
        return self.client.mark_messages_as_read(self.name, number)

    def archive_chat(self, number: str) -> Any:
        return self.client.archive_chat(self.name, number)

    def unarchive_chat(self, number: str) -> Any:
        return self.client.unarchive_chat(self.name, number)

    def delete_chat(self, number: str) -> Any:
        return self.client.delete_chat(self.name, number)

    # ==================== Contacts ====================

    def contacts(self) -> Any:
        return self.client.get_contacts(self.name)

    def contact(self, number: str) -> Any:
        return self.client.get_contact(self.name, number)

    def check_number(self, number: str) -> Any:
        return self.client.check_number(self.name, number)

    def block_contact(self, number: str) -> Any:
        return self.client.block_contact(self.name, number)

    def unblock_contact(self, number: str) -> Any:
        return self.client.unblock_contact(self.name, number)

    # ==================== Webhooks ====================

    def set_webhook(self, webhook_url: str, events: list[str] | None = None) -> Any:
        return self.client.set_webhook(self.name, webhook_url, events)

    def webhook(self) -> Any:
        return self.client.get_webhook(self.name)

    def delete_webhook(self) -> Any:
        return self.client.delete_webhook(self.name)
