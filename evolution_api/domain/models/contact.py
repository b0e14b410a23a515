"""Contact view over a find-contacts item."""

from typing import Any

from pydantic import Field, field_validator

from evolution_api.core.types import jid_number
from evolution_api.domain.models.base import PayloadView


class Contact(PayloadView):
    """Read-only projection of a contact payload."""

    id: str | None = None
    name: str | None = None
    push_name: str | None = Field(None, alias="pushName")
    verified_name: str | None = Field(None, alias="verifiedName")
    is_business: bool = Field(False, alias="isBusiness")
    is_enterprise: bool = Field(False, alias="isEnterprise")
    is_high_level_verified: bool = Field(False, alias="isHighLevelVerified")

    @field_validator(
        "is_business", "is_enterprise", "is_high_level_verified", mode="before"
    )
    @classmethod
    def strict_true(cls, v: Any) -> bool:
        return v is True

    @property
    def number(self) -> str | None:
        return jid_number(self.id)

    @property
    def display_name(self) -> str | None:
        """First non-empty of verified name, push name, name, then number."""
        for candidate in (self.verified_name, self.push_name, self.name):
            if candidate:
                return candidate
        return self.number

    @property
    def is_verified(self) -> bool:
        return bool(self.verified_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "push_name": self.push_name,
            "verified_name": self.verified_name,
            "display_name": self.display_name,
            "is_business": self.is_business,
            "is_enterprise": self.is_enterprise,
            "is_high_level_verified": self.is_high_level_verified,
            "verified": self.is_verified,
            "instance_name": self.instance_name,
        }
