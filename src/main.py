"""Main entry point for rblcheck."""

import argparse
import logging
import sys
import time

from src.config import Config
from src.exceptions import MissingArgument, RblCheckError
from src.services.logger import setup_logging, log_run_summary
from src.services.query_builder import build_queries
from src.services.resolver_bridge import run_resolver
from src.services.rule_loader import load_rules
from src.utils.ip_utils import parse_ipv4, reverse_ip


logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser reporting usage errors as checker failures (exit 1)."""

    def error(self, message: str):
        raise RblCheckError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="rblcheck",
        description=(
            "Check an IPv4 address against the RBL zones selected in the "
            "rule file. Arguments after the address are passed to the resolver."
        ),
    )
    parser.add_argument("address", nargs="?", help="IPv4 address to check")
    parser.add_argument(
        "resolver_args",
        nargs=argparse.REMAINDER,
        help="extra resolver options (e.g. -c 50 -t 1000)",
    )
    return parser


def parse_arguments(argv: list[str]) -> argparse.Namespace:
    """Split argv into the address and the resolver's arguments.

    The first argument is always the address, even when it starts with "-",
    so that it gets validated like any other address.
    """
    if argv and argv[0].startswith("-") and argv[0] not in ("-h", "--help"):
        return argparse.Namespace(address=argv[0], resolver_args=argv[1:])
    return build_parser().parse_args(argv)


def check_address(raw_address: str, rules_path: str) -> list[str]:
    """Validate an address and build its DNSBL query names.

    Every local failure surfaces here, before any resolver is started.

    Args:
        raw_address: IPv4 address as given on the command line.
        rules_path: Rule file selecting the RBL zones.

    Returns:
        list[str]: Query names in rule file order.
    """
    address = parse_ipv4(raw_address)
    reversed_ip = reverse_ip(address)
    rules = load_rules(rules_path)
    return list(build_queries(reversed_ip, rules))


def main(argv: list[str] | None = None) -> int:
    """Main execution function.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        int: Exit code (0 on success, 1 for local failures, 127 if the
        resolver is missing, otherwise the resolver's exit code).
    """
    start_time = time.time()

    try:
        config = Config.from_env()
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(verbose=config.verbose, log_format=config.log_format)

    try:
        args = parse_arguments(sys.argv[1:] if argv is None else argv)
        if not args.address:
            raise MissingArgument("missing parameter: IPv4 address")

        queries = check_address(args.address, config.rules_path)
        logger.info(
            f"Built {len(queries)} query names for {args.address}",
            extra={"queries": queries},
        )

        command = config.resolver_command + args.resolver_args
        exit_code = run_resolver(command, queries)

    except RblCheckError as e:
        logger.error(str(e))
        return e.exit_code

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    log_run_summary(
        ip=args.address,
        rules_path=config.rules_path,
        query_count=len(queries),
        exit_code=exit_code,
        duration_ms=int((time.time() - start_time) * 1000),
    )
    return exit_code


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
