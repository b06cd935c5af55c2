"""Command dispatch for the failover tool.

Maps the command-line options to exactly one action and runs it against
a RobotClient. Actions return the lines to print (or a duty state) and
raise FailoverError subclasses; deciding exit codes is left to the caller.
"""

from dataclasses import dataclass
from enum import Enum

from hetzner_failover.api.client import RobotClient
from hetzner_failover.credentials import Credentials
from hetzner_failover.duty import DutyState, evaluate, mark_for
from hetzner_failover.errors import UsageError
from hetzner_failover.model.output import format_header, format_record


class Action(Enum):
    """What a single invocation does."""

    LIST = "list"
    SHOW = "show"
    UPDATE = "update"
    TAKE_OVER = "take-over"
    CHECK_STATUS = "check-status"


@dataclass
class Invocation:
    """A resolved action with the addresses it works on."""

    action: Action
    failover_ip: str | None = None
    active_server_ip: str | None = None
    local_ip: str | None = None


def resolve_action(
    failover_ip: str | None = None,
    active_server_ip: str | None = None,
    local_ip: str | None = None,
    list_all: bool = False,
    check: bool = False,
    take: bool = False,
    defaults: Credentials | None = None,
) -> Invocation:
    """Pick the action for the given options.

    Explicit addresses win over the defaults from the credentials file.
    With no options at all every failover IP is listed.

    Raises:
        UsageError: If the options are contradictory or incomplete
    """
    explicit_failover_ip = failover_ip
    if defaults is not None:
        failover_ip = failover_ip or defaults.failover_ip
        local_ip = local_ip or defaults.local_ip

    if check and take:
        raise UsageError("--check and --take are mutually exclusive")
    if (check or take) and (list_all or active_server_ip):
        raise UsageError("--check and --take cannot be combined with --all or --active-server-ip")
    if list_all and active_server_ip:
        raise UsageError("--all cannot be combined with --active-server-ip")

    if check or take:
        if not failover_ip:
            raise UsageError("No failover IP given and none configured")
        if not local_ip:
            raise UsageError("No local IP given and none configured")
        action = Action.CHECK_STATUS if check else Action.TAKE_OVER
        return Invocation(action, failover_ip=failover_ip, local_ip=local_ip)

    if list_all:
        return Invocation(Action.LIST, failover_ip=failover_ip, local_ip=local_ip)

    if active_server_ip:
        if not failover_ip:
            raise UsageError("--active-server-ip needs a failover IP")
        return Invocation(
            Action.UPDATE,
            failover_ip=failover_ip,
            active_server_ip=active_server_ip,
            local_ip=local_ip,
        )

    if explicit_failover_ip:
        return Invocation(Action.SHOW, failover_ip=failover_ip, local_ip=local_ip)

    return Invocation(Action.LIST, failover_ip=failover_ip, local_ip=local_ip)


def list_all(
    client: RobotClient, tracked_ip: str | None = None, local_ip: str | None = None
) -> list[str]:
    """Header plus one line per failover IP.

    The duty column is added when a local IP is known; only the tracked
    failover IP gets a mark.
    """
    records = client.list_failovers()
    with_duty = local_ip is not None
    lines = [format_header(with_duty=with_duty)]
    for record in records:
        duty = mark_for(record, tracked_ip, local_ip) if with_duty else None
        lines.append(format_record(record, duty))
    return lines


def show_one(client: RobotClient, failover_ip: str, local_ip: str | None = None) -> str:
    """Line for one failover IP, marked when a local IP is known."""
    record = client.get_failover(failover_ip)
    duty = evaluate(record.active_server_address, local_ip) if local_ip else None
    return format_record(record, duty)


def update_one(
    client: RobotClient,
    failover_ip: str,
    active_server_ip: str,
    local_ip: str | None = None,
) -> str:
    """Route a failover IP to a new server and render the result."""
    record = client.update_failover(failover_ip, active_server_ip)
    duty = evaluate(record.active_server_address, local_ip) if local_ip else None
    return format_record(record, duty)


def take_over(client: RobotClient, failover_ip: str, local_ip: str) -> str:
    """Route a failover IP to this server."""
    return update_one(client, failover_ip, local_ip, local_ip)


def check_status(client: RobotClient, failover_ip: str, local_ip: str) -> DutyState:
    """Duty of this server for a failover IP."""
    record = client.get_failover(failover_ip)
    return evaluate(record.active_server_address, local_ip)


def run(client: RobotClient, invocation: Invocation) -> list[str]:
    """Run a printing action and return its output lines.

    CHECK_STATUS prints nothing and is run through check_status instead.
    """
    action = invocation.action
    if action == Action.LIST:
        return list_all(client, invocation.failover_ip, invocation.local_ip)
    elif action == Action.SHOW:
        return [show_one(client, invocation.failover_ip, invocation.local_ip)]
    elif action == Action.UPDATE:
        return [
            update_one(
                client,
                invocation.failover_ip,
                invocation.active_server_ip,
                invocation.local_ip,
            )
        ]
    elif action == Action.TAKE_OVER:
        return [take_over(client, invocation.failover_ip, invocation.local_ip)]
    else:
        raise ValueError(f"Action {action.value} does not print output")
