"""Instance view over a fetch-instances item."""

from typing import Any

from pydantic import Field, model_validator

from evolution_api.core.types import ConnectionState, jid_number
from evolution_api.domain.models.base import PayloadView


class InstanceInfo(PayloadView):
    """Read-only projection of an instance record.

    Older releases of the remote service report the state as ``status`` and
    nest the record under ``instance``; newer ones use a flat object with
    ``connectionStatus``. Both shapes are accepted.
    """

    id: str | None = None
    name: str | None = None
    connection_status: str | None = Field(None, alias="connectionStatus")
    owner_jid: str | None = Field(None, alias="ownerJid")
    profile_name: str | None = Field(None, alias="profileName")
    number: str | None = None
    integration: str | None = None

    @model_validator(mode="before")
    @classmethod
    def flatten_legacy_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flat = dict(data)
        nested = flat.pop("instance", None)
        if isinstance(nested, dict):
            flat = {**nested, **flat}
            if "instanceName" in nested and "name" not in flat:
                flat["name"] = nested["instanceName"]
        if "connectionStatus" not in flat:
            flat["connectionStatus"] = flat.get("status", flat.get("state"))
        return flat

    @property
    def is_open(self) -> bool:
        return self.connection_status == ConnectionState.OPEN.value

    @property
    def owner_number(self) -> str | None:
        return jid_number(self.owner_jid)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "connection_status": self.connection_status,
            "owner_jid": self.owner_jid,
            "profile_name": self.profile_name,
            "number": self.number,
            "integration": self.integration,
            "instance_name": self.instance_name,
        }
