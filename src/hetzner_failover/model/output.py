"""Tab-separated rendering of failover records."""

from hetzner_failover.duty import DutyState
from hetzner_failover.model.failover import FailoverRecord

COLUMNS = ("ip", "netmask", "active_server_ip", "server_ip", "server_number")
DUTY_COLUMN = "duty"

# Shown when Robot reports no active server
UNROUTED = "-"


def format_header(with_duty: bool = False) -> str:
    """Header line for the list view."""
    columns = COLUMNS + (DUTY_COLUMN,) if with_duty else COLUMNS
    return "\t".join(columns)


def format_record(record: FailoverRecord, duty: DutyState | None = None) -> str:
    """Render a record as one tab-separated line.

    Args:
        record: Record to render
        duty: Mark for the trailing duty column; omitted when None

    Returns:
        String like "198.51.100.5\\t/24\\t203.0.113.9\\t203.0.113.1\\t12345"

    Raises:
        NetmaskError: If the record's netmask is malformed
    """
    fields = [
        record.address,
        f"/{record.prefix_length}",
        record.active_server_address or UNROUTED,
        record.server_address,
        str(record.server_number),
    ]
    if duty is not None:
        fields.append(duty.mark)
    return "\t".join(fields)
