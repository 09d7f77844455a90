"""Entry point for rblresolve, the bulk DNS lookup tool.

Reads names (or IP addresses with -r) from stdin and resolves them
concurrently, printing one result line per input.
"""

import argparse
import logging
import os
import sys
from functools import partial

import dns.exception

from src.config import LoggingConfig
from src.services.bulk_resolver import (
    forward_lookup,
    make_resolver,
    read_names,
    resolve_stream,
    reverse_lookup,
)
from src.services.logger import setup_logging


logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rblresolve",
        description="A bulk DNS lookup tool. Reads items from stdin and resolves them concurrently.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-r", "--reverse", action="store_true", help="reverse lookup mode (IP to host name)"
    )
    mode.add_argument(
        "-a", "--address", action="store_true", help="address lookup mode (host name to IP)"
    )
    parser.add_argument(
        "-4", "--ipv4", action="store_true", help="query A records (used with -a)"
    )
    parser.add_argument(
        "-6", "--ipv6", action="store_true", help="query AAAA records (used with -a)"
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=_positive_int,
        default=25,
        help="number of simultaneous requests (default: 25)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=_positive_int,
        default=2000,
        help="timeout in milliseconds for each query attempt (default: 2000)",
    )
    parser.add_argument(
        "--attempts",
        type=_positive_int,
        default=2,
        help="number of attempts before giving up (default: 2)",
    )
    parser.add_argument(
        "-u",
        "--unordered",
        action="store_true",
        help="print results as soon as they are ready instead of in input order",
    )
    return parser


def record_types_for(args: argparse.Namespace) -> tuple[str, ...]:
    """Record types for forward lookups; A when no family is selected."""
    if args.ipv4 and args.ipv6:
        return ("A", "AAAA")
    if args.ipv6:
        return ("AAAA",)
    return ("A",)


def main(argv: list[str] | None = None) -> int:
    """Main execution function.

    Returns:
        int: Exit code (0 after end of input, 1 for fatal errors).
    """
    args = build_parser().parse_args(argv)

    try:
        logging_config = LoggingConfig.from_env()
        setup_logging(
            verbose=logging_config.verbose, log_format=logging_config.log_format
        )
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        resolver = make_resolver(timeout_ms=args.timeout, attempts=args.attempts)
    except dns.exception.DNSException as e:
        logger.error(f"Could not read system resolver configuration: {e}")
        return 1

    if args.reverse:
        lookup = partial(reverse_lookup, resolver)
    else:
        lookup = partial(forward_lookup, resolver, record_types=record_types_for(args))

    results = resolve_stream(
        read_names(sys.stdin.buffer),
        lookup,
        concurrency=args.concurrency,
        ordered=not args.unordered,
    )

    try:
        for result in results:
            sys.stdout.write(result.format_line() + "\n")
            sys.stdout.flush()
    except BrokenPipeError:
        logger.info("Output closed, stopping")
        results.close()
        # Keep the interpreter from flushing into the closed pipe at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())

    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
