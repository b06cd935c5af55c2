"""Unit tests for command dispatch."""

from unittest.mock import MagicMock

import pytest

from hetzner_failover.api.client import RobotClient
from hetzner_failover.credentials import Credentials
from hetzner_failover.dispatch import (
    Action,
    Invocation,
    check_status,
    list_all,
    resolve_action,
    run,
    show_one,
    take_over,
)
from hetzner_failover.duty import DutyState
from hetzner_failover.errors import NetmaskError, UsageError
from hetzner_failover.model.failover import FailoverRecord

FAILOVER_IP = "198.51.100.5"
LOCAL_IP = "203.0.113.1"


def make_record(
    address: str = FAILOVER_IP,
    active: str | None = "203.0.113.9",
    netmask: str = "255.255.255.0",
) -> FailoverRecord:
    return FailoverRecord(
        ip=address,
        netmask=netmask,
        active_server_ip=active,
        server_ip=LOCAL_IP,
        server_number=12345,
    )


@pytest.fixture
def client():
    """Create a mock Robot client."""
    return MagicMock(spec=RobotClient)


class TestResolveAction:
    """Tests for resolve_action."""

    def test_no_options_lists_all(self):
        """Test the default action."""
        assert resolve_action().action == Action.LIST

    def test_no_options_with_defaults_still_lists(self):
        """Test that configured defaults do not change the default action."""
        defaults = Credentials(login="a", password="b", failover_ip=FAILOVER_IP, local_ip=LOCAL_IP)
        invocation = resolve_action(defaults=defaults)
        assert invocation == Invocation(Action.LIST, failover_ip=FAILOVER_IP, local_ip=LOCAL_IP)

    def test_failover_ip_shows_one(self):
        """Test selecting a single failover IP."""
        invocation = resolve_action(failover_ip=FAILOVER_IP)
        assert invocation.action == Action.SHOW
        assert invocation.failover_ip == FAILOVER_IP

    def test_server_ip_updates(self):
        """Test selecting a reassignment."""
        invocation = resolve_action(failover_ip=FAILOVER_IP, active_server_ip="203.0.113.2")
        assert invocation.action == Action.UPDATE
        assert invocation.active_server_ip == "203.0.113.2"

    def test_server_ip_uses_default_failover_ip(self):
        """Test that the configured failover IP is used for updates."""
        defaults = Credentials(login="a", password="b", failover_ip=FAILOVER_IP)
        invocation = resolve_action(active_server_ip="203.0.113.2", defaults=defaults)
        assert invocation.action == Action.UPDATE
        assert invocation.failover_ip == FAILOVER_IP

    def test_server_ip_without_failover_ip(self):
        """Test that an update needs a failover IP."""
        with pytest.raises(UsageError):
            resolve_action(active_server_ip="203.0.113.2")

    def test_explicit_options_override_defaults(self):
        """Test that command-line addresses win."""
        defaults = Credentials(login="a", password="b", failover_ip="198.51.100.9", local_ip="203.0.113.7")
        invocation = resolve_action(failover_ip=FAILOVER_IP, local_ip=LOCAL_IP, defaults=defaults)
        assert invocation.failover_ip == FAILOVER_IP
        assert invocation.local_ip == LOCAL_IP

    def test_take_over(self):
        """Test selecting take-over."""
        invocation = resolve_action(failover_ip=FAILOVER_IP, local_ip=LOCAL_IP, take=True)
        assert invocation.action == Action.TAKE_OVER

    def test_check_status(self):
        """Test selecting the status check."""
        invocation = resolve_action(failover_ip=FAILOVER_IP, local_ip=LOCAL_IP, check=True)
        assert invocation.action == Action.CHECK_STATUS

    @pytest.mark.parametrize(
        "options",
        [
            {"check": True, "take": True},
            {"check": True, "list_all": True},
            {"take": True, "active_server_ip": "203.0.113.2"},
            {"list_all": True, "active_server_ip": "203.0.113.2"},
            {"check": True, "local_ip": None},
            {"take": True, "failover_ip": None},
        ],
    )
    def test_ambiguous_or_incomplete(self, options):
        """Test that contradictory or incomplete options are rejected."""
        kwargs = {"failover_ip": FAILOVER_IP, "local_ip": LOCAL_IP}
        kwargs.update(options)
        with pytest.raises(UsageError):
            resolve_action(**kwargs)


class TestActions:
    """Tests for the dispatched actions."""

    def test_show_one(self, client):
        """Test rendering one record without a local IP."""
        client.get_failover.return_value = make_record()

        line = show_one(client, FAILOVER_IP)

        assert line == "198.51.100.5\t/24\t203.0.113.9\t203.0.113.1\t12345"
        client.get_failover.assert_called_once_with(FAILOVER_IP)

    def test_show_one_marked(self, client):
        """Test rendering one record with a standby mark."""
        client.get_failover.return_value = make_record()

        assert show_one(client, FAILOVER_IP, LOCAL_IP).endswith("\t12345\t-")

    def test_list_all_without_local_ip(self, client):
        """Test listing without a duty column."""
        client.list_failovers.return_value = [make_record(), make_record(address="198.51.100.6")]

        lines = list_all(client)

        assert lines == [
            "ip\tnetmask\tactive_server_ip\tserver_ip\tserver_number",
            "198.51.100.5\t/24\t203.0.113.9\t203.0.113.1\t12345",
            "198.51.100.6\t/24\t203.0.113.9\t203.0.113.1\t12345",
        ]

    def test_list_all_marks_tracked_only(self, client):
        """Test that only the tracked failover IP carries a mark."""
        client.list_failovers.return_value = [
            make_record(active=LOCAL_IP),
            make_record(address="198.51.100.6", active=LOCAL_IP),
        ]

        lines = list_all(client, FAILOVER_IP, LOCAL_IP)

        assert lines[0].endswith("\tduty")
        assert lines[1].split("\t")[-1] == "+"
        assert lines[2].split("\t")[-1] == ""

    def test_take_over(self, client):
        """Test that take-over routes to the local IP and is on duty."""
        client.update_failover.return_value = make_record(active=LOCAL_IP)

        line = take_over(client, FAILOVER_IP, LOCAL_IP)

        client.update_failover.assert_called_once_with(FAILOVER_IP, LOCAL_IP)
        assert line.endswith("\t+")

    def test_check_status(self, client):
        """Test the status check in both directions."""
        client.get_failover.return_value = make_record(active=LOCAL_IP)
        assert check_status(client, FAILOVER_IP, LOCAL_IP) == DutyState.ON_DUTY

        client.get_failover.return_value = make_record(active="203.0.113.9")
        assert check_status(client, FAILOVER_IP, LOCAL_IP) == DutyState.STANDBY

    def test_unrouted_record(self, client):
        """Test rendering a failover IP without an active server."""
        client.get_failover.return_value = make_record(active=None)

        assert show_one(client, FAILOVER_IP) == "198.51.100.5\t/24\t-\t203.0.113.1\t12345"

    def test_malformed_netmask_raises(self, client):
        """Test that a bad netmask surfaces as an error."""
        client.get_failover.return_value = make_record(netmask="255.255.0")

        with pytest.raises(NetmaskError):
            show_one(client, FAILOVER_IP)

    def test_run_update(self, client):
        """Test running an update invocation."""
        client.update_failover.return_value = make_record(active="203.0.113.2")
        invocation = Invocation(Action.UPDATE, failover_ip=FAILOVER_IP, active_server_ip="203.0.113.2")

        assert run(client, invocation) == ["198.51.100.5\t/24\t203.0.113.2\t203.0.113.1\t12345"]

    def test_run_rejects_check_status(self, client):
        """Test that the status check is not a printing action."""
        with pytest.raises(ValueError):
            run(client, Invocation(Action.CHECK_STATUS, FAILOVER_IP, local_ip=LOCAL_IP))
