"""Chat view over a find-chats item."""

from typing import Any

from pydantic import Field, field_validator

from evolution_api.core.types import jid_number
from evolution_api.domain.models.base import PayloadView


class Chat(PayloadView):
    """Read-only projection of a chat payload."""

    id: str | None = None
    name: str | None = None
    unread_count: int = Field(0, alias="unreadCount")
    is_group: bool = Field(False, alias="isGroup")
    is_read_only: bool = Field(False, alias="isReadOnly")
    archived: bool = False
    pinned: bool = False

    @field_validator("unread_count", mode="before")
    @classmethod
    def none_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("is_group", "is_read_only", "archived", "pinned", mode="before")
    @classmethod
    def strict_true(cls, v: Any) -> bool:
        # Only a literal true counts; missing or null flags read as False
        return v is True

    @property
    def unread(self) -> bool:
        return self.unread_count > 0

    @property
    def is_private(self) -> bool:
        return not self.is_group

    @property
    def number(self) -> str | None:
        return jid_number(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "unread_count": self.unread_count,
            "is_group": self.is_group,
            "is_private": self.is_private,
            "is_read_only": self.is_read_only,
            "archived": self.archived,
            "pinned": self.pinned,
            "instance_name": self.instance_name,
        }
