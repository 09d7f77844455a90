"""Bridge feeding query names to the external bulk resolver."""

import logging
import subprocess
from typing import Iterable, Sequence

from src.exceptions import ResolverUnavailable


logger = logging.getLogger(__name__)


def _close_quietly(stream) -> None:
    try:
        stream.close()
    except BrokenPipeError:
        pass


def run_resolver(command: Sequence[str], queries: Iterable[str]) -> int:
    """Stream query names to the resolver's stdin and wait for it to finish.

    The resolver inherits this process's stdout and stderr, so its output is
    passed through verbatim. If the resolver exits before reading all input,
    the broken pipe ends the feed instead of blocking.

    Args:
        command: Resolver argv (e.g., ["rblresolve", "-a"]).
        queries: Query hostnames, one per line of resolver input.

    Returns:
        int: The resolver's exit code.

    Raises:
        ResolverUnavailable: If the resolver executable cannot be started.
    """
    try:
        process = subprocess.Popen(
            list(command),
            stdin=subprocess.PIPE,
            text=True,
            encoding="utf-8",
        )
    except FileNotFoundError as e:
        raise ResolverUnavailable(f"resolver {command[0]!r} not found") from e
    except PermissionError as e:
        raise ResolverUnavailable(f"resolver {command[0]!r} is not executable") from e

    sent = 0
    try:
        for query in queries:
            process.stdin.write(query + "\n")
            sent += 1
        process.stdin.flush()
    except BrokenPipeError:
        logger.warning(f"Resolver closed its input after {sent} queries")
    finally:
        _close_quietly(process.stdin)
        returncode = process.wait()

    logger.info(
        "Resolver finished",
        extra={"queries_sent": sent, "resolver_exit_code": returncode},
    )
    return returncode
