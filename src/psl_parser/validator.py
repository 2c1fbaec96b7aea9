"""
Hostname syntax validation.

Checks an ASCII-encoded hostname against DNS label syntax before any suffix
lookup happens. From RFC 1035 / RFC 1123:

- the whole name is 1 to 255 characters, dots included
- each label is 1 to 63 characters
- labels hold a-z, 0-9, hyphen and underscore
- a label neither starts nor ends with a hyphen

Validation runs on the encoded form, so IDNA must be applied first.
"""

import re
from typing import Optional

from psl_parser.enums import ValidationErrorCode


MAX_DOMAIN_LENGTH = 255
MAX_LABEL_LENGTH = 63

LABEL_CHARS_PATTERN = re.compile(r"[a-z0-9\-_]+")


# Fixed, user-visible messages returned alongside each error code.
ERROR_MESSAGES: dict[ValidationErrorCode, str] = {
    ValidationErrorCode.DOMAIN_TOO_SHORT: "Domain name too short.",
    ValidationErrorCode.DOMAIN_TOO_LONG: (
        "Domain name too long. It should be no more than 255 chars."
    ),
    ValidationErrorCode.LABEL_STARTS_WITH_DASH: (
        "Domain name label can not start with a dash."
    ),
    ValidationErrorCode.LABEL_ENDS_WITH_DASH: (
        "Domain name label can not end with a dash."
    ),
    ValidationErrorCode.LABEL_TOO_LONG: (
        "Domain name label should be at most 63 chars long."
    ),
    ValidationErrorCode.LABEL_TOO_SHORT: (
        "Domain name label should be at least 1 character long."
    ),
    ValidationErrorCode.LABEL_INVALID_CHARS: (
        "Domain name label can only contain alphanumeric characters or dashes."
    ),
}


class DomainValidator:
    """
    Validates ASCII hostnames label by label.

    Checks run in a fixed order and stop at the first failure, so a hostname
    with several problems always reports the same code.
    """

    def validate(self, ascii_domain: str) -> Optional[ValidationErrorCode]:
        """
        Validate an ASCII-encoded hostname.

        Args:
            ascii_domain: Hostname after IDNA encoding

        Returns:
            The first failing ValidationErrorCode, or None if the hostname passes
        """
        if len(ascii_domain) < 1:
            return ValidationErrorCode.DOMAIN_TOO_SHORT
        if len(ascii_domain) > MAX_DOMAIN_LENGTH:
            return ValidationErrorCode.DOMAIN_TOO_LONG

        for label in ascii_domain.split("."):
            error = self.validate_label(label)
            if error is not None:
                return error

        return None

    def validate_label(self, label: str) -> Optional[ValidationErrorCode]:
        """Validate a single label; returns the first failing code or None."""
        if not label:
            return ValidationErrorCode.LABEL_TOO_SHORT
        if len(label) > MAX_LABEL_LENGTH:
            return ValidationErrorCode.LABEL_TOO_LONG
        if label.startswith("-"):
            return ValidationErrorCode.LABEL_STARTS_WITH_DASH
        if label.endswith("-"):
            return ValidationErrorCode.LABEL_ENDS_WITH_DASH
        if not LABEL_CHARS_PATTERN.fullmatch(label):
            return ValidationErrorCode.LABEL_INVALID_CHARS
        return None

    @staticmethod
    def message_for(code: ValidationErrorCode) -> str:
        """Return the fixed human-readable message for an error code."""
        return ERROR_MESSAGES[code]


_default_validator = DomainValidator()


def validate(ascii_domain: str) -> Optional[ValidationErrorCode]:
    """Validate ``ascii_domain`` with the shared validator."""
    return _default_validator.validate(ascii_domain)
