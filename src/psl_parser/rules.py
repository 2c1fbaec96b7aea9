"""
Public suffix rules and the rule index.

A rule is one line of the Public Suffix List, optionally prefixed with
``*.`` (wildcard: every direct child of the suffix is itself a public
suffix) or ``!`` (exception: carves one name out of a wildcard). The index
maps the ASCII form of each rule's suffix to the rule and is read-only once
built, so it can be shared between threads without locking.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from .exceptions import RuleIndexError, RuleListError
from .idna_codec import AsciiEncoder, IdnaEncoder


WILDCARD_PREFIX = "*."
EXCEPTION_PREFIX = "!"
COMMENT_PREFIX = "//"

DEFAULT_RULES_PATH = Path(__file__).resolve().parent / "data" / "public_suffix_list.dat"


@dataclass(frozen=True)
class Rule:
    """A single parsed public suffix rule."""

    rule: str  # Rule text as listed, e.g. '*.ck', '!www.ck', 'com'
    suffix: str  # Rule text without the '*.' or '!' prefix
    ascii_suffix: str  # IDNA form of suffix, used as the index key
    wildcard: bool = False
    exception: bool = False

    @property
    def labels(self) -> list[str]:
        """Suffix labels, left to right."""
        return self.suffix.split(".")


def parse_rule_line(line: str) -> Optional[str]:
    """
    Extract the rule token from one line of a rule list.

    Args:
        line: Raw line from the list

    Returns:
        The text up to the first whitespace, or None for blank and comment lines
    """
    trimmed = line.strip()
    if not trimmed or trimmed.startswith(COMMENT_PREFIX):
        return None
    return trimmed.split()[0]


def make_rule(rule_text: str, encoder: AsciiEncoder) -> Rule:
    """Build a Rule from its text, stripping a single wildcard or exception prefix."""
    wildcard = rule_text.startswith(WILDCARD_PREFIX)
    exception = rule_text.startswith(EXCEPTION_PREFIX)

    if wildcard:
        suffix = rule_text[len(WILDCARD_PREFIX):]
    elif exception:
        suffix = rule_text[len(EXCEPTION_PREFIX):]
    else:
        suffix = rule_text

    return Rule(
        rule=rule_text,
        suffix=suffix,
        ascii_suffix=encoder.to_ascii(suffix),
        wildcard=wildcard,
        exception=exception,
    )


class RuleIndex:
    """
    Immutable mapping from ASCII suffix to Rule.

    Build instances with build_index(); lookups never modify the index.
    """

    def __init__(self, rules: dict[str, Rule]) -> None:
        self._rules = MappingProxyType(dict(rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, ascii_suffix: object) -> bool:
        return ascii_suffix in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __getitem__(self, ascii_suffix: str) -> Rule:
        return self._rules[ascii_suffix]

    def get(self, ascii_suffix: str) -> Optional[Rule]:
        return self._rules.get(ascii_suffix)

    @property
    def rules(self) -> MappingProxyType:
        """Read-only view of the underlying mapping."""
        return self._rules

    def find(self, ascii_domain: str) -> Optional[Rule]:
        """
        Find the most specific rule matching an ASCII domain.

        Candidates are tried from the whole domain downwards, dropping the
        left-most label each time; the first hit is the longest suffix.

        Args:
            ascii_domain: Lowercased, IDNA-encoded domain

        Returns:
            The matching Rule, or None if no suffix of the domain is listed
        """
        labels = ascii_domain.split(".")
        for i in range(len(labels)):
            rule = self._rules.get(".".join(labels[i:]))
            if rule is not None:
                return rule
        return None


def build_index(
    rule_lines: Iterable[str],
    encoder: Optional[AsciiEncoder] = None,
) -> RuleIndex:
    """
    Build a RuleIndex from raw rule list lines.

    Blank lines and ``//`` comments are skipped; only the token before the
    first whitespace of a line is read.

    Args:
        rule_lines: Lines of a public suffix list, in order
        encoder: ASCII encoder for suffixes (defaults to IdnaEncoder)

    Returns:
        The populated, read-only RuleIndex

    Raises:
        RuleIndexError: If two rules encode to the same ASCII suffix
    """
    encoder = encoder or IdnaEncoder()
    rules: dict[str, Rule] = {}

    for line in rule_lines:
        rule_text = parse_rule_line(line)
        if rule_text is None:
            continue

        rule = make_rule(rule_text, encoder)
        existing = rules.get(rule.ascii_suffix)
        if existing is not None:
            raise RuleIndexError(
                code="duplicate_rule",
                message=f"Multiple rules found for {rule.rule} ({rule.ascii_suffix})",
                details={
                    "rule": rule.rule,
                    "existing_rule": existing.rule,
                    "ascii_suffix": rule.ascii_suffix,
                },
            )
        rules[rule.ascii_suffix] = rule

    return RuleIndex(rules)


def load_rule_lines(path: Path) -> list[str]:
    """
    Read the lines of a rule list file.

    Raises:
        RuleListError: If the file cannot be read
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except OSError as e:
        raise RuleListError(
            code="unreadable_rule_list",
            message=f"Could not read rule list: {e}",
            details={"path": str(path)},
        )


def load_index(
    path: Optional[Path] = None,
    encoder: Optional[AsciiEncoder] = None,
) -> RuleIndex:
    """
    Load a rule list file and build its index.

    Args:
        path: Rule list file (defaults to the bundled snapshot)
        encoder: ASCII encoder for suffixes

    Raises:
        RuleListError: If the file cannot be read or holds no rules
        RuleIndexError: If the list contains duplicate suffixes
    """
    path = path or DEFAULT_RULES_PATH
    index = build_index(load_rule_lines(path), encoder)
    if not len(index):
        raise RuleListError(
            code="empty_rule_list",
            message=f"Rule list contains no rules: {path}",
            details={"path": str(path)},
        )
    return index
