"""Rule file loader for RBL zone selection."""

import logging
import os
from pathlib import Path
from typing import Iterator

from src.exceptions import ConfigMissing
from src.models.rbl_rule import SELECT_MARKER, RblRule
from src.utils.ip_utils import normalize_zone


logger = logging.getLogger(__name__)


def parse_rule_line(line: str) -> RblRule | None:
    """Parse one rule file line.

    Args:
        line: Raw line, trailing newline included or not.

    Returns:
        RblRule | None: The rule for a "-s <zone>" line, None for anything
        else (blank lines, comments, unknown keys, "-s" without a zone).
    """
    fields = line.strip().split(None, 1)
    if not fields or fields[0] != SELECT_MARKER:
        return None

    zone = normalize_zone(fields[1]) if len(fields) == 2 else ""
    if not zone:
        logger.debug(f"Skipping {SELECT_MARKER} directive without a zone")
        return None

    return RblRule(zone=zone, marker=fields[0])


def _iter_rules(path: Path) -> Iterator[RblRule]:
    with path.open("rb") as f:
        for lineno, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug(f"Skipping line {lineno} of {path}: not valid UTF-8")
                continue
            rule = parse_rule_line(line)
            if rule is not None:
                yield rule


def load_rules(path: str | Path) -> Iterator[RblRule]:
    """Load RBL rules from a rule file, lazily and in file order.

    The existence check happens immediately; the file itself is only opened
    once the returned iterator is consumed, and is closed after the scan.

    Args:
        path: Rule file path.

    Returns:
        Iterator[RblRule]: Selected zones in file order.

    Raises:
        ConfigMissing: If path is not an existing, readable file.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigMissing(f'file "{path}" does not exist')
    if not os.access(path, os.R_OK):
        raise ConfigMissing(f'file "{path}" is not readable')

    return _iter_rules(path)
