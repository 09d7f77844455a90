"""Bulk resolver lookup result models."""

from dataclasses import dataclass, field
from enum import Enum


class LookupStatus(Enum):
    """Classification of a single bulk lookup."""

    RESOLVED = "RESOLVED"  # At least one A/AAAA/PTR record
    NXDOMAIN = "NXDOMAIN"  # Name does not exist
    TEMPORARY_ERROR = "TEMPORARY_ERROR"  # Timeout, SERVFAIL, or other failure
    NO_RECORDS = "NO_RECORDS"  # Name exists but has no records of the type
    INVALID_ADDRESS = "INVALID_ADDRESS"  # Reverse mode input is not an IP


@dataclass
class LookupResult:
    """Result of resolving one input line.

    Attributes:
        name: Input line as read (hostname, or IP in reverse mode).
        status: Classification of the lookup.
        answers: Addresses (forward) or host names (reverse), in answer order.
        record_type: "A" or "AAAA" when only one family was queried; used to
            word the no-records message.
    """

    name: str
    status: LookupStatus
    answers: list[str] = field(default_factory=list)
    record_type: str = ""

    def is_resolved(self) -> bool:
        """Check if the lookup produced any records.

        Returns:
            bool: True if status is RESOLVED, False otherwise.
        """
        return self.status == LookupStatus.RESOLVED

    def format_line(self) -> str:
        """Render the result as one output line.

        Returns:
            str: "name=answer[,answer...]" on success, "name:<reason>" otherwise.
        """
        if self.status == LookupStatus.RESOLVED:
            return f"{self.name}={','.join(self.answers)}"
        if self.status == LookupStatus.NXDOMAIN:
            return f"{self.name}:NXDOMAIN"
        if self.status == LookupStatus.TEMPORARY_ERROR:
            return f"{self.name}:Temporary error"
        if self.status == LookupStatus.INVALID_ADDRESS:
            return f"{self.name}:Invalid IP address format"
        if self.record_type:
            return f"{self.name}:No {self.record_type} records found"
        return f"{self.name}:No records found"
