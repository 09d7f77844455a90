"""DNSBL query name construction."""

from typing import Iterable, Iterator

from src.models.rbl_rule import RblRule
from src.utils.ip_utils import build_dnsbl_query


def build_queries(reversed_ip: str, rules: Iterable[RblRule]) -> Iterator[str]:
    """Build one query name per rule, in rule order.

    Duplicate rules produce duplicate query names.

    Args:
        reversed_ip: Octet-reversed IPv4 address.
        rules: Rules selecting the zones to check.

    Yields:
        str: Query hostnames such as "1.2.0.192.zen.spamhaus.org".
    """
    for rule in rules:
        yield build_dnsbl_query(reversed_ip, rule.zone)
