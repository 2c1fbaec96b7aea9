"""
ASCII-compatible encoding of domain names.

The resolver and the rule index both key on the ASCII form of a domain, so
they must share one encoder. IdnaEncoder is the default implementation and
is backed by the idna library (IDNA 2008 with UTS #46 mapping).
"""

from typing import Protocol, runtime_checkable

import idna


ACE_PREFIX = "xn--"


@runtime_checkable
class AsciiEncoder(Protocol):
    """Converts a Unicode domain (or single label) to its ASCII form."""

    def to_ascii(self, domain: str) -> str:
        ...


class IdnaEncoder:
    """
    Label-wise IDNA encoder.

    Pure ASCII labels are returned unchanged, so underscores and labels that
    are already punycode (``xn--...``) survive untouched. A label the idna
    library refuses (IDNA 2008 disallows symbols and emoji, and rejects
    labels over 63 octets) is still punycode-encoded with the ``xn--``
    prefix, so validation always sees the ASCII form and its DNS length.
    """

    def to_ascii(self, domain: str) -> str:
        return ".".join(self.label_to_ascii(label) for label in domain.split("."))

    def label_to_ascii(self, label: str) -> str:
        if label.isascii():
            return label

        try:
            return idna.encode(label, uts46=True).decode("ascii")
        except idna.IDNAError:
            return ACE_PREFIX + label.encode("punycode").decode("ascii")


_default_encoder = IdnaEncoder()


def to_ascii(domain: str) -> str:
    """Encode ``domain`` with the shared default encoder."""
    return _default_encoder.to_ascii(domain)
