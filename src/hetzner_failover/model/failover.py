"""Failover IP data model.

Pydantic model describing a Robot failover record. Field aliases are the
JSON keys used by the webservice.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from hetzner_failover.model.netmask import prefix_length

# Robot wraps every record in a single-key object
ENVELOPE_KEY = "failover"


class FailoverRecord(BaseModel):
    """A failover IP and the server currently routing it.

    Fetched fresh on every invocation; never cached or written back.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    address: str = Field(..., alias="ip", min_length=1, description="Failover IP address")
    netmask: str = Field(..., description="Dotted-quad netmask of the failover IP")
    active_server_address: str | None = Field(
        ...,
        alias="active_server_ip",
        description="Server currently receiving traffic (null when unrouted)",
    )
    server_address: str = Field(..., alias="server_ip", description="Owning server IP")
    server_number: int = Field(..., ge=0, description="Owning server number")

    @property
    def prefix_length(self) -> int:
        """CIDR prefix length of the netmask."""
        return prefix_length(self.netmask)

    @classmethod
    def from_payload(cls, payload: Any) -> "FailoverRecord":
        """Validate one record, unwrapping the Robot envelope if present.

        Raises:
            pydantic.ValidationError: If the payload does not match the schema
        """
        if isinstance(payload, dict) and ENVELOPE_KEY in payload:
            payload = payload[ENVELOPE_KEY]
        return cls.model_validate(payload)
