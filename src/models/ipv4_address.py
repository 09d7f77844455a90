"""Validated IPv4 address model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IPv4Address:
    """IPv4 address as four validated octets.

    Attributes:
        octets: The four octets in network order, each in 0-255.
    """

    octets: tuple[int, int, int, int]

    def __post_init__(self) -> None:
        if len(self.octets) != 4:
            raise ValueError(f"IPv4 address needs 4 octets, got {len(self.octets)}")
        for octet in self.octets:
            if not 0 <= octet <= 255:
                raise ValueError(f"Octet {octet} out of range")

    def __str__(self) -> str:
        return ".".join(str(octet) for octet in self.octets)
