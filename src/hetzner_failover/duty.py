"""Duty evaluation for failover addresses.

Decides whether "this" server (the reference address) is the active
server of a failover IP, and maps the answer onto display marks and
process exit codes for health-check scripts.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hetzner_failover.model.failover import FailoverRecord

# Exit codes. API failures in status-check mode use ApiError.exit_code,
# which stays within 100-255.
EXIT_ACTIVE = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_STANDBY = 3


class DutyState(Enum):
    """Duty of the reference server for a failover IP."""

    ON_DUTY = "on-duty"
    STANDBY = "standby"
    NOT_APPLICABLE = "not-applicable"

    @property
    def mark(self) -> str:
        """Single-character display mark."""
        return _MARKS[self]

    @property
    def exit_code(self) -> int:
        """Exit code for status-check mode."""
        if self is DutyState.ON_DUTY:
            return EXIT_ACTIVE
        if self is DutyState.STANDBY:
            return EXIT_STANDBY
        raise ValueError(f"No exit code for {self.value}")


_MARKS = {
    DutyState.ON_DUTY: "+",
    DutyState.STANDBY: "-",
    DutyState.NOT_APPLICABLE: "",
}


def evaluate(active_server_address: str | None, reference_address: str) -> DutyState:
    """Compare the active server with the reference address.

    Example:
        >>> evaluate("203.0.113.1", "203.0.113.1")
        <DutyState.ON_DUTY: 'on-duty'>
    """
    if active_server_address is not None and active_server_address == reference_address:
        return DutyState.ON_DUTY
    return DutyState.STANDBY


def mark_for(
    record: "FailoverRecord",
    tracked_address: str | None,
    reference_address: str,
) -> DutyState:
    """Duty state of a record in the list view.

    Records other than the tracked failover IP are not applicable.
    """
    if tracked_address is None or record.address != tracked_address:
        return DutyState.NOT_APPLICABLE
    return evaluate(record.active_server_address, reference_address)
