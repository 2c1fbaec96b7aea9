"""
Enumeration types for the PSL parser.

These enums provide type-safe constants for validation error codes,
parse status values, resolution outcomes and logging levels.
"""

from enum import Enum


class ValidationErrorCode(Enum):
    """Error codes for hostname syntax validation failures."""

    DOMAIN_TOO_SHORT = "DOMAIN_TOO_SHORT"
    DOMAIN_TOO_LONG = "DOMAIN_TOO_LONG"
    LABEL_STARTS_WITH_DASH = "LABEL_STARTS_WITH_DASH"
    LABEL_ENDS_WITH_DASH = "LABEL_ENDS_WITH_DASH"
    LABEL_TOO_LONG = "LABEL_TOO_LONG"
    LABEL_TOO_SHORT = "LABEL_TOO_SHORT"
    LABEL_INVALID_CHARS = "LABEL_INVALID_CHARS"


class ParseStatus(Enum):
    """Status of a parse call."""

    SUCCESS = "success"
    ERROR = "error"


class Outcome(Enum):
    """Terminal outcome of a single resolution."""

    ERROR = "error"
    LOCAL = "local"
    UNLISTED = "unlisted"
    LISTED = "listed"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
