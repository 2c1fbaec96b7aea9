"""
Suffix resolver.

Splits a hostname into tld, sld, domain and subdomain using the most
specific matching public suffix rule. The resolver holds no mutable state:
every parse() call works on local data and only reads the shared RuleIndex.
"""

from typing import Optional

from .audit_logger import AuditLogger
from .enums import LogLevel, Outcome, ParseStatus
from .idna_codec import ACE_PREFIX, AsciiEncoder, IdnaEncoder
from .models import ParseError, ParsedDomain, ParseResult
from .rules import Rule, RuleIndex
from .validator import DomainValidator


# Non-Internet pseudo-TLD (mDNS); never looked up.
LOCAL_TLD = "local"


class SuffixResolver:
    """
    Resolves hostnames against a RuleIndex.

    Resolution ends in one of four outcomes: error (syntax validation
    failed), local (pseudo-TLD), unlisted (no rule matched) or listed.
    """

    COMPONENT = "resolver"

    def __init__(
        self,
        index: RuleIndex,
        encoder: Optional[AsciiEncoder] = None,
        validator: Optional[DomainValidator] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            index: Rule index built from the public suffix list
            encoder: ASCII encoder; must be the one the index was built with
            validator: Hostname syntax validator
            logger: Optional logger for resolution traces
        """
        self._index = index
        self._encoder = encoder or IdnaEncoder()
        self._validator = validator or DomainValidator()
        self._logger = logger

    @property
    def index(self) -> RuleIndex:
        return self._index

    def find_rule(self, domain: str) -> Optional[Rule]:
        """Return the most specific rule matching ``domain``, if any."""
        return self._index.find(self._encoder.to_ascii(domain))

    def parse(self, input: str) -> ParseResult:
        """
        Parse a hostname into its components.

        Args:
            input: Hostname, optionally with one trailing dot

        Returns:
            ParseResult with status success and parsed components, or
            status error and the validation failure

        Raises:
            TypeError: If input is not a string
        """
        if not isinstance(input, str):
            raise TypeError("Domain name must be a string.")

        domain = input.lower()
        if domain.endswith("."):
            domain = domain[:-1]

        ascii_domain = self._encoder.to_ascii(domain)

        error_code = self._validator.validate(ascii_domain)
        if error_code is not None:
            self._log(
                "Validation failed",
                {"input": input, "code": error_code.value},
            )
            return ParseResult(
                status=ParseStatus.ERROR,
                outcome=Outcome.ERROR,
                error=ParseError(
                    input=input,
                    code=error_code,
                    message=self._validator.message_for(error_code),
                ),
            )

        parsed = ParsedDomain(input=input)
        labels = ascii_domain.split(".")

        if labels[-1] == LOCAL_TLD:
            return self._success(parsed, Outcome.LOCAL)

        rule = self._index.find(ascii_domain)
        if rule is None:
            self._log("No rule matched", {"domain": ascii_domain})
            self._resolve_unlisted(parsed, labels)
            return self._success(
                self._encode_output(parsed, ascii_domain),
                Outcome.UNLISTED,
            )

        self._log("Rule matched", {"domain": ascii_domain, "rule": rule.rule})
        self._resolve_listed(parsed, labels, rule)
        return self._success(
            self._encode_output(parsed, ascii_domain),
            Outcome.LISTED,
        )

    def get(self, domain: Optional[str]) -> Optional[str]:
        """
        Return the registrable domain of ``domain``.

        Empty or missing input yields None without parsing.
        """
        if not domain:
            return None

        result = self.parse(domain)
        if result.error is not None:
            return None
        return result.parsed.domain

    def is_valid(self, domain: str) -> bool:
        """Check whether ``domain`` has a registrable domain under a listed suffix."""
        result = self.parse(domain)
        if result.parsed is None:
            return False
        return bool(result.parsed.domain and result.parsed.listed)

    def _resolve_unlisted(self, parsed: ParsedDomain, labels: list[str]) -> None:
        # A single label cannot form an sld + tld pair.
        if len(labels) < 2:
            return

        remaining = list(labels)
        parsed.tld = remaining.pop()
        parsed.sld = remaining.pop()
        parsed.domain = f"{parsed.sld}.{parsed.tld}"
        if remaining:
            parsed.subdomain = ".".join(remaining)

    def _resolve_listed(
        self,
        parsed: ParsedDomain,
        labels: list[str],
        rule: Rule,
    ) -> None:
        parsed.listed = True

        tld_labels = rule.labels
        private_labels = labels[:len(labels) - len(tld_labels)]

        # '!a.p' makes 'a' registrable directly under 'p'.
        if rule.exception:
            private_labels.append(tld_labels.pop(0))

        parsed.tld = ".".join(tld_labels)
        if not private_labels:
            return

        # '*.p' makes every direct child of 'p' a public suffix too.
        if rule.wildcard:
            tld_labels.insert(0, private_labels.pop())
            parsed.tld = ".".join(tld_labels)

        if not private_labels:
            return

        parsed.sld = private_labels.pop()
        parsed.domain = f"{parsed.sld}.{parsed.tld}"
        if private_labels:
            parsed.subdomain = ".".join(private_labels)

    def _encode_output(self, parsed: ParsedDomain, ascii_domain: str) -> ParsedDomain:
        # Only applies when the encoded domain carries punycode labels.
        if ACE_PREFIX not in ascii_domain:
            return parsed
        if parsed.domain:
            parsed.domain = self._encoder.to_ascii(parsed.domain)
        if parsed.subdomain:
            parsed.subdomain = self._encoder.to_ascii(parsed.subdomain)
        return parsed

    @staticmethod
    def _success(parsed: ParsedDomain, outcome: Outcome) -> ParseResult:
        return ParseResult(
            status=ParseStatus.SUCCESS,
            outcome=outcome,
            parsed=parsed,
        )

    def _log(self, message: str, data: dict) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.DEBUG, self.COMPONENT, message, data)
