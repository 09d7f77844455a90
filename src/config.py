"""Configuration module for rblcheck.

Loads and validates environment variables. The rule file location and the
resolver command are injected here instead of being hard-wired.
"""

import os
import shlex
from dataclasses import dataclass
from typing import List


DEFAULT_RULES_PATH = "rblcheckrc"
DEFAULT_RESOLVER_COMMAND = "rblresolve -a"
DEFAULT_LOG_FORMAT = "text"
LOG_FORMATS = ("json", "text")


@dataclass
class LoggingConfig:
    """Logging settings shared by rblcheck and rblresolve."""

    verbose: bool
    log_format: str

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Load VERBOSE and LOG_FORMAT.

        Raises:
            ValueError: If LOG_FORMAT is not a known format.

        Returns:
            LoggingConfig: Validated logging settings.
        """
        verbose_str = os.getenv("VERBOSE", "false").lower()
        verbose = verbose_str in ("true", "1", "yes")

        log_format = (os.getenv("LOG_FORMAT") or DEFAULT_LOG_FORMAT).lower()
        if log_format not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of: {', '.join(LOG_FORMATS)}")

        return cls(verbose=verbose, log_format=log_format)


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Rule Configuration
    rules_path: str

    # Resolver Configuration
    resolver_command: List[str]

    # Operational Configuration
    verbose: bool
    log_format: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If a variable is set to an invalid value.

        Returns:
            Config: Validated configuration instance.
        """
        rules_path = os.getenv("RBLCHECK_RULES") or DEFAULT_RULES_PATH

        resolver_command_str = os.getenv("RBLCHECK_RESOLVER") or DEFAULT_RESOLVER_COMMAND
        try:
            resolver_command = shlex.split(resolver_command_str)
        except ValueError as e:
            raise ValueError(f"RBLCHECK_RESOLVER could not be parsed: {e}") from e
        if not resolver_command:
            raise ValueError("RBLCHECK_RESOLVER must name a command")

        logging_config = LoggingConfig.from_env()

        return cls(
            rules_path=rules_path,
            resolver_command=resolver_command,
            verbose=logging_config.verbose,
            log_format=logging_config.log_format,
        )
