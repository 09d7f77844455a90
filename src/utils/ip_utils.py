"""IP address utilities for DNSBL queries."""

import re

from src.exceptions import InvalidFormat, NonNumeric, OutOfRange
from src.models.ipv4_address import IPv4Address


_DECIMAL_OCTET = re.compile(r"[0-9]+")


def parse_ipv4(raw: str) -> IPv4Address:
    """Parse and validate a dotted-quad IPv4 address.

    Octets are always read as base 10, so leading zeros never switch to
    octal ("010" is ten).

    Args:
        raw: Address text as given on the command line.

    Returns:
        IPv4Address: The validated address.

    Raises:
        InvalidFormat: If the address does not have exactly four parts.
        NonNumeric: If an octet contains anything but ASCII digits.
        OutOfRange: If an octet is greater than 255.

    Examples:
        >>> str(parse_ipv4("203.0.113.45"))
        '203.0.113.45'
        >>> parse_ipv4("192.168.010.1").octets
        (192, 168, 10, 1)
    """
    parts = raw.split(".")
    if len(parts) != 4:
        raise InvalidFormat(f"invalid IPv4 address: {raw!r}")

    octets = []
    for part in parts:
        if not _DECIMAL_OCTET.fullmatch(part):
            raise NonNumeric(f'octet "{part}" contains non-numeric characters')
        # Compare significant digits first; int() rejects very long strings
        digits = part.lstrip("0") or "0"
        if len(digits) > 3 or int(digits, 10) > 255:
            raise OutOfRange(f'octet "{part}" out of range')
        octets.append(int(digits, 10))

    return IPv4Address(tuple(octets))


def reverse_ip(address: IPv4Address) -> str:
    """Convert IPv4 address to reverse DNS format for DNSBL queries.

    DNSBL queries require reversed octets. For example:
    203.0.113.45 becomes 45.113.0.203

    Args:
        address: Validated IPv4 address.

    Returns:
        str: Reversed IP address.

    Examples:
        >>> reverse_ip(parse_ipv4("203.0.113.45"))
        '45.113.0.203'
        >>> reverse_ip(parse_ipv4("192.168.1.1"))
        '1.1.168.192'
    """
    return ".".join(str(octet) for octet in reversed(address.octets))


def normalize_zone(zone: str) -> str:
    """Strip surrounding whitespace and dots that would break the separator.

    Leading dots are dropped and a run of trailing dots collapses to one, so
    a fully-qualified zone ("bl.example.") keeps its root dot.

    Examples:
        >>> normalize_zone("  .zen.spamhaus.org ")
        'zen.spamhaus.org'
        >>> normalize_zone("bl.spamcop.net..")
        'bl.spamcop.net.'
    """
    zone = zone.strip().lstrip(".")
    if zone.endswith("."):
        zone = zone.rstrip(".") + "."
    return zone if zone != "." else ""


def build_dnsbl_query(reversed_ip: str, zone: str) -> str:
    """Build DNSBL query hostname for DNS lookup.

    Args:
        reversed_ip: Octet-reversed IPv4 address (see reverse_ip).
        zone: DNSBL zone domain (e.g., "zen.spamhaus.org").

    Returns:
        str: DNSBL query hostname (e.g., "45.113.0.203.zen.spamhaus.org").

    Raises:
        ValueError: If zone is empty.

    Examples:
        >>> build_dnsbl_query("45.113.0.203", "zen.spamhaus.org")
        '45.113.0.203.zen.spamhaus.org'
    """
    zone = normalize_zone(zone)
    if not zone:
        raise ValueError("DNSBL zone cannot be empty")

    return f"{reversed_ip}.{zone}"
