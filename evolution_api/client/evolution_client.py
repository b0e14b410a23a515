"""
Evolution API resource client.

One method per remote operation, grouped by resource family (instance, message,
chat, contact, webhook). Each method builds the path and body for its endpoint
and hands them to ``HttpTransport``; results are returned exactly as the
transport produced them (parsed JSON, raw text, or None).
"""

from typing import Any

import httpx

from evolution_api.client.transport import HttpTransport, build_path
from evolution_api.core.config.settings import EvolutionConfig
from evolution_api.core.logging.logger import get_logger
from evolution_api.domain.instance import Instance
from evolution_api.models.request_models import (
    ContactCard,
    CreateInstanceRequest,
    FindMessagesRequest,
    LocationMessageRequest,
    SetWebhookRequest,
)


def _compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in body.items() if value is not None}


class EvolutionClient:
    """
    Facade over the Evolution API REST endpoints.

    Example:
        config = EvolutionConfig(base_url="http://localhost:8080", api_key="secret")
        with EvolutionClient(config) as client:
            client.send_text_message("bot1", "5511999999999", "Hello!")
    """

    def __init__(
        self,
        config: EvolutionConfig | None = None,
        transport: HttpTransport | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration (defaults apply when omitted)
            transport: Pre-built transport; takes precedence over ``http_client``
            http_client: Optional ``httpx.Client`` for the transport to use
        """
        self.config = config or (transport.config if transport else EvolutionConfig())
        self.transport = transport or HttpTransport(self.config, http_client=http_client)
        self.logger = get_logger(__name__)

    def instance(self, name: str) -> Instance:
        """Return a session wrapper bound to the instance ``name``."""
        return Instance(name, self)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "EvolutionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ==================== Instances ====================

    def list_instances(self) -> Any:
        return self.transport.get("/instance/fetchInstances")

    def create_instance(
        self,
        instance_name: str,
        qrcode: bool = True,
        number: str | None = None,
        token: str | None = None,
        webhook: str | None = None,
        webhook_by_events: bool = False,
        webhook_base64: bool = False,
    ) -> Any:
        """Create a new instance.

        Options left as None are omitted from the request body.
        """
        body = CreateInstanceRequest(
            instance_name=instance_name,
            qrcode=qrcode,
            number=number,
            token=token,
            webhook=webhook,
            webhook_by_events=webhook_by_events,
            webhook_base64=webhook_base64,
        )
        self.logger.info(f"Creating instance {instance_name}")
        return self.transport.post("/instance/create", body.to_payload())

    def connect_instance(self, instance_name: str) -> Any:
        return self.transport.post(build_path("instance", "connect", instance_name))

    def disconnect_instance(self, instance_name: str) -> Any:
        """Log the instance out of the messaging platform."""
        return self.transport.delete(build_path("instance", "logout", instance_name))

    def delete_instance(self, instance_name: str) -> Any:
        return self.transport.delete(build_path("instance", "delete", instance_name))

    def restart_instance(self, instance_name: str) -> Any:
        return self.transport.put(build_path("instance", "restart", instance_name))

    def get_connection_state(self, instance_name: str) -> Any:
        return self.transport.get(
            build_path("instance", "connectionState", instance_name)
        )

    def get_instance(self, instance_name: str) -> Any:
        """Fetch one instance by name.

        The remote may answer with the object itself or with a list holding it;
        both are normalized to the single object (None for an empty list).
        """
        result = self.transport.get(
            "/instance/fetchInstances", params={"instanceName": instance_name}
        )
        if isinstance(result, list):
            return result[0] if result else None
        return result

    def get_qr_code(self, instance_name: str) -> Any:
        return self.transport.get(build_path("instance", "connect", instance_name))

    # ==================== Messages ====================

    def _send(self, kind: str, instance_name: str, body: dict[str, Any]) -> Any:
        self.logger.debug(f"Sending {kind} message to {body.get('number')}")
        return self.transport.post(build_path("message", kind, instance_name), body)

    def send_text_message(
        self,
        instance_name: str,
        number: str,
        text: str,
        options: dict[str, Any] | None = None,
    ) -> Any:
        body = _compact({"number": number, "text": text, "options": options})
        return self._send("sendText", instance_name, body)

    def send_image_message(
        self,
        instance_name: str,
        number: str,
        image_url: str,
        caption: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        body = _compact(
            {"number": number, "image": image_url, "caption": caption, "options": options}
        )
        return self._send("sendImage", instance_name, body)

    def send_audio_message(
        self,
        instance_name: str,
        number: str,
        audio_url: str,
        options: dict[str, Any] | None = None,
    ) -> Any:
        body = _compact({"number": number, "audio": audio_url, "options": options})
        return self._send("sendAudio", instance_name, body)

    def send_video_message(
        self,
        instance_name: str,
        number: str,
        video_url: str,
        caption: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        body = _compact(
            {"number": number, "video": video_url, "caption": caption, "options": options}
        )
        return self._send("sendVideo", instance_name, body)

    def send_document_message(
        self,
        instance_name: str,
        number: str,
        document_url: str,
        caption: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        body = _compact(
            {
                "number": number,
                "document": document_url,
                "caption": caption,
                "options": options,
            }
        )
        return self._send("sendDocument", instance_name, body)

    def send_location_message(
        self,
        instance_name: str,
        number: str,
        latitude: float,
        longitude: float,
        description: str | None = None,
    ) -> Any:
        body = LocationMessageRequest(
            number=number,
            latitude=latitude,
            longitude=longitude,
            description=description,
        )
        return self._send("sendLocation", instance_name, body.to_payload())

    def send_contact_message(
        self,
        instance_name: str,
        number: str,
        contact_number: str,
        contact_name: str,
    ) -> Any:
        card = ContactCard(number=contact_number, name=contact_name)
        body = {"number": number, "contacts": [card.model_dump()]}
        return self._send("sendContact", instance_name, body)

    def send_button_message(
        self,
        instance_name: str,
        number: str,
        title: str,
        description: str,
        buttons: list[dict[str, Any]],
    ) -> Any:
        body = {
            "number": number,
            "title": title,
            "description": description,
            "buttons": buttons,
        }
        return self._send("sendButton", instance_name, body)

    def send_list_message(
        self,
        instance_name: str,
        number: str,
        title: str,
        description: str,
        sections: list[dict[str, Any]],
    ) -> Any:
        body = {
            "number": number,
            "title": title,
            "description": description,
            "sections": sections,
        }
        return self._send("sendList", instance_name, body)

    # ==================== Chats ====================

    def get_chats(self, instance_name: str) -> Any:
        return self.transport.get(build_path("chat", "findChats", instance_name))

    def get_messages(
        self,
        instance_name: str,
        remote_jid: str,
        limit: int = 50,
        cursor: str | None = None,
    ) -> Any:
        """Find messages of one chat, ``limit`` per page, continuing from ``cursor``."""
        body = FindMessagesRequest(remote_jid=remote_jid, limit=limit, cursor=cursor)
        return self.transport.post(
            build_path("chat", "findMessages", instance_name), body.to_payload()
        )

    def mark_messages_as_read(self, instance_name: str, number: str) -> Any:
        return self.transport.post(
            build_path("chat", "markMessageAsRead", instance_name), {"number": number}
        )

    def archive_chat(self, instance_name: str, number: str) -> Any:
        return self.transport.post(
            build_path("chat", "archiveChat", instance_name), {"number": number}
        )

    def unarchive_chat(self, instance_name: str, number: str) -> Any:
        return self.transport.post(
            build_path("chat", "unarchiveChat", instance_name), {"number": number}
        )

    def delete_chat(self, instance_name: str, number: str) -> Any:
        return self.transport.delete(
            build_path("chat", "deleteChat", instance_name, number)
        )

    # ==================== Contacts ====================

    def get_contacts(self, instance_name: str) -> Any:
        return self.transport.get(build_path("contact", "findContacts", instance_name))

    def get_contact(self, instance_name: str, number: str) -> Any:
        return self.transport.get(
            build_path("contact", "findContact", instance_name, number)
        )

    def check_number(self, instance_name: str, number: str) -> Any:
        """Check whether ``number`` is registered on the messaging platform."""
        return self.transport.post(
            build_path("contact", "checkNumber", instance_name), {"number": number}
        )

    def block_contact(self, instance_name: str, number: str) -> Any:
        return self.transport.post(
            build_path("contact", "blockContact", instance_name), {"number": number}
        )

    def unblock_contact(self, instance_name: str, number: str) -> Any:
        return self.transport.post(
            build_path("contact", "unblockContact", instance_name), {"number": number}
        )

    # ==================== Webhooks ====================

    def set_webhook(
        self,
        instance_name: str,
        webhook_url: str,
        events: list[str] | None = None,
    ) -> Any:
        """Point the instance's event notifications at ``webhook_url``.

        ``webhookByEvents`` is enabled only when a non-empty ``events`` list is
        given, and the list is sent only in that case.
        """
        body = SetWebhookRequest(webhook=webhook_url, events=events)
        self.logger.info(f"Setting webhook for {instance_name}")
        return self.transport.post(
            build_path("webhook", "set", instance_name), body.to_payload()
        )

    def get_webhook(self, instance_name: str) -> Any:
        return self.transport.get(build_path("webhook", "find", instance_name))

    def delete_webhook(self, instance_name: str) -> Any:
        return self.transport.delete(build_path("webhook", "del", instance_name))
