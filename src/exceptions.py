"""Error taxonomy for RBL checks.

Every local precondition failure is detected before the resolver is spawned
and maps to exit code 1.
"""


class RblCheckError(ValueError):
    """Base class for checker failures that terminate the run."""

    exit_code = 1


class MissingArgument(RblCheckError):
    """No IPv4 address was given on the command line."""


class InvalidFormat(RblCheckError):
    """Address does not consist of exactly four dot-separated parts."""


class NonNumeric(RblCheckError):
    """An octet contains something other than decimal digits."""


class OutOfRange(RblCheckError):
    """An octet is outside 0-255."""


class ConfigMissing(RblCheckError):
    """Rule file does not exist."""


class ResolverUnavailable(RblCheckError):
    """Resolver executable could not be started."""

    exit_code = 127
