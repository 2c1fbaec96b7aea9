"""
PSL Parser - split hostnames using the Public Suffix List.

Resolves a hostname into its public suffix (tld), second-level domain
(sld), registrable domain and subdomain, after validating DNS label syntax.

The module-level parse(), get() and is_valid() use a rule index built from
the bundled list snapshot when the package is imported.
"""

__version__ = "0.1.0"
__author__ = "PSL Parser Team"

from typing import Optional

from psl_parser.exceptions import (
    PSLParserError,
    RuleIndexError,
    RuleListError,
    RuleFetchError,
)
from psl_parser.enums import (
    ValidationErrorCode,
    ParseStatus,
    Outcome,
    LogLevel,
)
from psl_parser.idna_codec import (
    AsciiEncoder,
    IdnaEncoder,
    to_ascii,
)
from psl_parser.validator import (
    DomainValidator,
    ERROR_MESSAGES,
    validate,
)
from psl_parser.rules import (
    Rule,
    RuleIndex,
    build_index,
    load_index,
    load_rule_lines,
    parse_rule_line,
    DEFAULT_RULES_PATH,
)
from psl_parser.models import (
    ParsedDomain,
    ParseError,
    ParseResult,
)
from psl_parser.resolver import SuffixResolver
from psl_parser.audit_logger import (
    AuditLogger,
    LogEntry,
)
from psl_parser.config import (
    RuleSourceConfig,
    LoggingConfig,
    SystemConfig,
    create_default_config,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from psl_parser.rule_updater import (
    RuleUpdater,
    UpdateResult,
)


default_resolver = SuffixResolver(load_index())
rules = default_resolver.index


def parse(input: str) -> ParseResult:
    """Parse ``input`` against the bundled public suffix list."""
    return default_resolver.parse(input)


def get(domain: Optional[str]) -> Optional[str]:
    """Return the registrable domain of ``domain``, or None."""
    return default_resolver.get(domain)


def is_valid(domain: str) -> bool:
    """Check whether ``domain`` has a registrable domain under a listed suffix."""
    return default_resolver.is_valid(domain)


__all__ = [
    # Exceptions
    "PSLParserError",
    "RuleIndexError",
    "RuleListError",
    "RuleFetchError",
    # Enums
    "ValidationErrorCode",
    "ParseStatus",
    "Outcome",
    "LogLevel",
    # Encoding
    "AsciiEncoder",
    "IdnaEncoder",
    "to_ascii",
    # Validation
    "DomainValidator",
    "ERROR_MESSAGES",
    "validate",
    # Rules
    "Rule",
    "RuleIndex",
    "build_index",
    "load_index",
    "load_rule_lines",
    "parse_rule_line",
    "DEFAULT_RULES_PATH",
    # Models
    "ParsedDomain",
    "ParseError",
    "ParseResult",
    # Resolver
    "SuffixResolver",
    "default_resolver",
    "rules",
    "parse",
    "get",
    "is_valid",
    # Logging
    "AuditLogger",
    "LogEntry",
    # Configuration
    "RuleSourceConfig",
    "LoggingConfig",
    "SystemConfig",
    "create_default_config",
    "load_config_from_env",
    "load_config_from_file",
    "save_config_to_file",
    # Updater
    "RuleUpdater",
    "UpdateResult",
]
