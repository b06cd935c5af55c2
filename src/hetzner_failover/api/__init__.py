"""Robot webservice access."""

from hetzner_failover.api.client import RobotClient

__all__ = ["RobotClient"]
