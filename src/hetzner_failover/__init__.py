"""Show and switch Hetzner Robot failover IPs."""

__version__ = "0.1.0"
