"""Configuration loading from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Valid log levels
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Base URL reported by the fake client when none is configured
DEFAULT_JIRA_URL = "https://my-jira.com"

# Page size applied when a search requests max_results=0
DEFAULT_MAX_RESULTS = 50


@dataclass(frozen=True)
class Config:
    """Fake Jira configuration loaded from environment.

    This dataclass is frozen (immutable) to prevent accidental modification
    after creation.
    """

    jira_url: str = DEFAULT_JIRA_URL
    default_max_results: int = DEFAULT_MAX_RESULTS

    # Raise JqlParseError on malformed clauses instead of dropping them
    strict_jql: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    diagnostic_tags: str = ""


def _parse_positive_int(value: str, name: str, default: int) -> int:
    """Parse a string as a positive integer with validation.

    Args:
        value: The string value to parse.
        name: The name of the setting (for error messages).
        default: The default value to use if parsing fails.

    Returns:
        The parsed positive integer, or the default if invalid.

    Logs a warning if the value is invalid.
    """
    try:
        parsed = int(value)
        if parsed <= 0:
            logging.warning(
                "Invalid %s: %d is not positive, using default %d",
                name,
                parsed,
                default,
            )
            return default
        return parsed
    except ValueError:
        logging.warning(
            "Invalid %s: '%s' is not a valid integer, using default %d",
            name,
            value,
            default,
        )
        return default


def _validate_log_level(value: str, default: str = "INFO") -> str:
    """Validate and normalize a log level string.

    Args:
        value: The log level string to validate.
        default: The default value to use if invalid.

    Returns:
        The validated log level (uppercase), or the default if invalid.
    """
    normalized = value.upper()
    if normalized not in VALID_LOG_LEVELS:
        logging.warning(
            "Invalid FAKEJIRA_LOG_LEVEL: '%s' is not valid, using default '%s'. Valid values: %s",
            value,
            default,
            ", ".join(sorted(VALID_LOG_LEVELS)),
        )
        return default
    return normalized


def _parse_bool(value: str) -> bool:
    """Parse a string as a boolean.

    Returns:
        True if value is "true", "1", or "yes" (case-insensitive), False otherwise.
    """
    return value.lower() in ("true", "1", "yes")


def load_config(env_file: Path | None = None) -> Config:
    """Load configuration from environment variables.

    Args:
        env_file: Optional path to .env file. If not provided,
                  looks for .env in current directory.

    Returns:
        Config object with loaded values.

    Invalid values are replaced by their defaults with a warning.
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    jira_url = os.getenv("FAKEJIRA_URL", "").strip() or DEFAULT_JIRA_URL

    default_max_results = _parse_positive_int(
        os.getenv("FAKEJIRA_DEFAULT_MAX_RESULTS", str(DEFAULT_MAX_RESULTS)),
        "FAKEJIRA_DEFAULT_MAX_RESULTS",
        DEFAULT_MAX_RESULTS,
    )

    strict_jql = _parse_bool(os.getenv("FAKEJIRA_STRICT_JQL", ""))

    log_level = _validate_log_level(os.getenv("FAKEJIRA_LOG_LEVEL", "INFO"))
    log_json = _parse_bool(os.getenv("FAKEJIRA_LOG_JSON", ""))
    diagnostic_tags = os.getenv("FAKEJIRA_DIAGNOSTIC_TAGS", "")

    return Config(
        jira_url=jira_url,
        default_max_results=default_max_results,
        strict_jql=strict_jql,
        log_level=log_level,
        log_json=log_json,
        diagnostic_tags=diagnostic_tags,
    )
