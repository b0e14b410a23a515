"""Webhook view over a find-webhook response."""

from typing import Any

from pydantic import Field, field_validator

from evolution_api.domain.models.base import PayloadView


class Webhook(PayloadView):
    """Read-only projection of a webhook configuration."""

    url: str | None = Field(None, alias="webhook")
    events: tuple[str, ...] = ()

    @field_validator("events", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def event_enabled(self, event: str) -> bool:
        return event in self.events

    @property
    def enabled_events(self) -> list[str]:
        return list(self.events)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "events": list(self.events),
            "configured": self.configured,
            "instance_name": self.instance_name,
        }
