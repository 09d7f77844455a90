"""RBL rule model read from the rule file."""

from dataclasses import dataclass


SELECT_MARKER = "-s"


@dataclass(frozen=True)
class RblRule:
    """A directive selecting one RBL zone to check.

    Attributes:
        zone: DNSBL zone suffix (e.g., "zen.spamhaus.org").
        marker: Directive key the rule was read from.
    """

    zone: str
    marker: str = SELECT_MARKER
