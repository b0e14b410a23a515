"""Shared base for read-only projections over API payloads."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class PayloadView(BaseModel):
    """Immutable view over one JSON object returned by the remote service.

    Unknown keys are ignored; ``instance_name`` records the resource scope the
    payload was fetched from.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    instance_name: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any], instance_name: str | None = None) -> Self:
        """Build the view from a raw payload."""
        return cls.model_validate({**data, "instance_name": instance_name})

    @classmethod
    def from_payloads(
        cls, items: list[dict[str, Any]] | None, instance_name: str | None = None
    ) -> list[Self]:
        """Build one view per item of a list response."""
        return [cls.from_payload(item, instance_name) for item in items or []]
