"""Netmask utilities.

Converts dotted-quad subnet masks into CIDR prefix lengths for display.
"""

from ipaddress import AddressValueError, IPv4Address

from hetzner_failover.errors import NetmaskError

IPV4_BITS = 32
IPV4_ALL_ONES = (1 << IPV4_BITS) - 1


def prefix_length(netmask: str) -> int:
    """Count the leading one-bits of a dotted-quad netmask.

    Args:
        netmask: Mask like "255.255.255.0"

    Returns:
        Prefix length between 0 and 32

    Raises:
        NetmaskError: If netmask is not a well-formed IPv4 dotted quad

    Example:
        >>> prefix_length("255.255.255.0")
        24
    """
    try:
        value = int(IPv4Address(netmask))
    except (AddressValueError, TypeError) as e:
        raise NetmaskError(str(netmask)) from e

    # Leading ones of the mask are the leading zeros of its complement
    return IPV4_BITS - (~value & IPV4_ALL_ONES).bit_length()
