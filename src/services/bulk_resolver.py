"""Bulk DNS resolver service.

Resolves newline-delimited names concurrently with a bounded number of
in-flight lookups, optionally preserving input order.
"""

import ipaddress
import logging
from collections import deque
from concurrent.futures import (
    FIRST_COMPLETED,
    ThreadPoolExecutor,
    as_completed,
    wait,
)
from typing import BinaryIO, Callable, Iterable, Iterator, Sequence

import dns.exception
import dns.resolver

from src.models.lookup_result import LookupResult, LookupStatus


logger = logging.getLogger(__name__)

Lookup = Callable[[str], LookupResult]


def make_resolver(timeout_ms: int = 2000, attempts: int = 2) -> dns.resolver.Resolver:
    """Build a resolver from the system configuration with custom timeouts.

    Total time per lookup is roughly timeout * attempts * nameservers.

    Args:
        timeout_ms: Timeout in milliseconds for each query attempt.
        attempts: Number of attempts against each nameserver.

    Returns:
        dns.resolver.Resolver: Configured resolver.
    """
    resolver = dns.resolver.Resolver()
    resolver.timeout = timeout_ms / 1000
    resolver.lifetime = resolver.timeout * attempts * max(1, len(resolver.nameservers))
    return resolver


def categorize_failure(exception: Exception) -> str:
    """Categorize DNS failure for result classification.

    Args:
        exception: The DNS exception that occurred.

    Returns:
        str: One of: nxdomain, nodata, temporary.
    """
    if isinstance(exception, dns.resolver.NXDOMAIN):
        return "nxdomain"
    elif isinstance(exception, dns.resolver.NoAnswer):
        return "nodata"
    else:
        # Timeout, SERVFAIL (NoNameservers), malformed names
        return "temporary"


def forward_lookup(
    resolver: dns.resolver.Resolver,
    name: str,
    record_types: Sequence[str] = ("A",),
) -> LookupResult:
    """Resolve a host name to addresses.

    When nothing resolves, errors are ranked NXDOMAIN > temporary > NODATA.

    Args:
        resolver: Configured resolver.
        name: Host name to resolve.
        record_types: "A" and/or "AAAA".

    Returns:
        LookupResult: Classified lookup result.
    """
    answers: list[str] = []
    failures: list[str] = []

    for record_type in record_types:
        try:
            for rdata in resolver.resolve(name, record_type):
                answers.append(rdata.to_text())
        except dns.exception.DNSException as e:
            failures.append(categorize_failure(e))

    if answers:
        return LookupResult(name, LookupStatus.RESOLVED, answers)
    if "nxdomain" in failures:
        return LookupResult(name, LookupStatus.NXDOMAIN)
    if "temporary" in failures:
        return LookupResult(name, LookupStatus.TEMPORARY_ERROR)

    record_type = record_types[0] if len(record_types) == 1 else ""
    return LookupResult(name, LookupStatus.NO_RECORDS, record_type=record_type)


def reverse_lookup(resolver: dns.resolver.Resolver, text: str) -> LookupResult:
    """Resolve an IPv4 or IPv6 address to its first PTR name.

    Args:
        resolver: Configured resolver.
        text: IP address text.

    Returns:
        LookupResult: Classified lookup result.
    """
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        return LookupResult(text, LookupStatus.INVALID_ADDRESS)

    try:
        answer = resolver.resolve_address(str(address))
    except dns.exception.DNSException as e:
        failure = categorize_failure(e)
        if failure == "nxdomain":
            return LookupResult(text, LookupStatus.NXDOMAIN)
        if failure == "nodata":
            return LookupResult(text, LookupStatus.NO_RECORDS)
        return LookupResult(text, LookupStatus.TEMPORARY_ERROR)

    for rdata in answer:
        return LookupResult(text, LookupStatus.RESOLVED, [rdata.target.to_text()])
    return LookupResult(text, LookupStatus.NO_RECORDS)


def read_names(stream: BinaryIO) -> Iterator[str]:
    """Read names from a byte stream, one per line.

    Blank lines, "#" comments and lines that are not valid UTF-8 are skipped.

    Args:
        stream: Binary input stream (e.g., sys.stdin.buffer).

    Yields:
        str: Stripped names in input order.
    """
    for raw in stream:
        try:
            line = raw.decode("utf-8").strip()
        except UnicodeDecodeError:
            logger.debug("Skipping input line that is not valid UTF-8")
            continue
        if line and not line.startswith("#"):
            yield line


def _safe_lookup(lookup: Lookup, name: str) -> LookupResult:
    try:
        return lookup(name)
    except Exception as e:
        # Unexpected error - treat as temporary
        logger.error(f"Unexpected error resolving {name}: {e}")
        return LookupResult(name, LookupStatus.TEMPORARY_ERROR)


def resolve_stream(
    names: Iterable[str],
    lookup: Lookup,
    concurrency: int = 25,
    ordered: bool = True,
) -> Iterator[LookupResult]:
    """Resolve names concurrently with at most `concurrency` lookups in flight.

    Input is consumed as results drain, so arbitrarily long streams are not
    buffered whole.

    Args:
        names: Names to resolve.
        lookup: Function resolving one name.
        concurrency: Max concurrent lookups.
        ordered: Yield results in input order; otherwise as they complete.

    Yields:
        LookupResult: One result per input name.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")

    with ThreadPoolExecutor(max_workers=concurrency) as executor:
        if ordered:
            queue: deque = deque()
            for name in names:
                queue.append(executor.submit(_safe_lookup, lookup, name))
                if len(queue) >= concurrency:
                    yield queue.popleft().result()
            while queue:
                yield queue.popleft().result()
        else:
            pending: set = set()
            for name in names:
                if len(pending) >= concurrency:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    for future in done:
                        yield future.result()
                pending.add(executor.submit(_safe_lookup, lookup, name))
            for future in as_completed(pending):
                yield future.result()
