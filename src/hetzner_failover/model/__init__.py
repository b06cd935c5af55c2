"""Failover data model and rendering."""

from hetzner_failover.model.failover import FailoverRecord
from hetzner_failover.model.netmask import prefix_length
from hetzner_failover.model.output import format_header, format_record

__all__ = [
    "FailoverRecord",
    "format_header",
    "format_record",
    "prefix_length",
]
