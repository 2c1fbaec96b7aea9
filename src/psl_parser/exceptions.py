"""
Exception classes for the PSL parser.

All exceptions inherit from PSLParserError and provide structured
error information with codes, messages, and optional details.

Malformed hostnames are not exceptional: they are reported through
ParseResult values. These exceptions cover configuration and I/O failures.
"""

from typing import Optional


class PSLParserError(Exception):
    """Base exception for all PSL parser errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class RuleIndexError(PSLParserError):
    """Raised when a rule list cannot form a consistent index (duplicate suffix)."""

    pass


class RuleListError(PSLParserError):
    """Raised when a rule list source cannot be read or holds no rules."""

    pass


class RuleFetchError(PSLParserError):
    """Raised when downloading the public suffix list fails."""

    pass
