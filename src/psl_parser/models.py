"""
Data models for parse results.

A ParseResult carries exactly one of ``parsed`` (status success) or
``error`` (status error), mirroring the two outcomes callers branch on.
"""

from dataclasses import asdict, dataclass
from typing import Optional

from .enums import Outcome, ParseStatus, ValidationErrorCode


@dataclass
class ParsedDomain:
    """Components of a successfully resolved hostname."""

    input: str  # Original input, unmodified
    tld: Optional[str] = None  # Public suffix, e.g. 'co.uk'
    sld: Optional[str] = None  # Label directly left of the suffix
    domain: Optional[str] = None  # sld + '.' + tld
    subdomain: Optional[str] = None  # Remaining labels left of sld
    listed: bool = False  # True if a rule from the list matched


@dataclass
class ParseError:
    """Validation failure for a hostname."""

    input: str
    code: ValidationErrorCode
    message: str


@dataclass
class ParseResult:
    """Result of a parse call."""

    status: ParseStatus
    outcome: Outcome
    parsed: Optional[ParsedDomain] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.SUCCESS

    def to_dict(self) -> dict:
        """Convert the result to a JSON-serializable dictionary."""
        error = None
        if self.error is not None:
            error = {
                "input": self.error.input,
                "code": self.error.code.value,
                "message": self.error.message,
            }
        return {
            "status": self.status.value,
            "outcome": self.outcome.value,
            "parsed": asdict(self.parsed) if self.parsed is not None else None,
            "error": error,
        }
