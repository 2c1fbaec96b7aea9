"""
Command-line interface for the PSL parser.

Commands:
- parse: Parse one or more hostnames and print the results as JSON
- get: Print the registrable domain of a hostname
- is-valid: Exit 0 if a hostname has a registrable domain under a listed suffix
- update-rules: Download the public suffix list into a snapshot file
- config: Configuration management
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_CONFIG_PATH,
    SystemConfig,
    create_default_config,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from .enums import LogLevel
from .exceptions import PSLParserError
from .i18n import get_message, get_validation_message
from .resolver import SuffixResolver
from .rule_updater import RuleUpdater
from .rules import load_index


def load_cli_config(args: argparse.Namespace) -> Optional[SystemConfig]:
    """Load the config file given with --config, else the environment."""
    if getattr(args, "config", None):
        return load_config_from_file(Path(args.config))
    return load_config_from_env()


def create_logger(config: SystemConfig, verbose: bool = False) -> AuditLogger:
    """Create a logger from configuration; --verbose lowers the level to debug."""
    return AuditLogger(
        output_format=config.logging.output_format,
        min_level=LogLevel.DEBUG if verbose else config.logging.log_level,
    )


def create_resolver(
    args: argparse.Namespace,
    config: SystemConfig,
    logger: AuditLogger,
) -> SuffixResolver:
    """Build a resolver over --rules, or the configured snapshot."""
    rules_path = Path(args.rules) if args.rules else config.rules.snapshot_path
    return SuffixResolver(load_index(rules_path), logger=logger)


def _language(args: argparse.Namespace, config: SystemConfig) -> str:
    return args.language or config.language


def _prepare(args: argparse.Namespace):
    config = load_cli_config(args)
    if config is None:
        print(f"Error: Could not load config from {args.config}", file=sys.stderr)
        return None, None, None

    logger = create_logger(config, args.verbose)
    try:
        resolver = create_resolver(args, config, logger)
    except PSLParserError as e:
        logger.log_error("cli", "Could not load rules", error=e)
        print(
            get_message("cli.rules_load_failed", _language(args, config), error=e.message),
            file=sys.stderr,
        )
        return config, logger, None

    return config, logger, resolver


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle the 'parse' command."""
    config, logger, resolver = _prepare(args)
    if resolver is None:
        return 1

    results = [resolver.parse(domain) for domain in args.domains]
    output = [result.to_dict() for result in results]
    if len(output) == 1:
        output = output[0]

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0 if all(result.ok for result in results) else 1


def cmd_get(args: argparse.Namespace) -> int:
    """Handle the 'get' command."""
    config, logger, resolver = _prepare(args)
    if resolver is None:
        return 1

    language = _language(args, config)
    result = resolver.parse(args.domain)
    if result.error is not None:
        print(
            get_message(
                "cli.invalid_domain",
                language,
                domain=args.domain,
                message=get_validation_message(result.error.code, language),
            ),
            file=sys.stderr,
        )
        return 1

    if not result.parsed.domain:
        print(get_message("cli.no_domain", language, domain=args.domain), file=sys.stderr)
        return 1

    print(result.parsed.domain)
    return 0


def cmd_is_valid(args: argparse.Namespace) -> int:
    """Handle the 'is-valid' command."""
    config, logger, resolver = _prepare(args)
    if resolver is None:
        return 1

    language = _language(args, config)
    if resolver.is_valid(args.domain):
        print(get_message("cli.valid", language, domain=args.domain))
        return 0

    print(get_message("cli.not_valid", language, domain=args.domain))
    return 1


async def update_rules(
    config: SystemConfig,
    output: Path,
    logger: Optional[AuditLogger] = None,
    language: Optional[str] = None,
) -> int:
    """
    Download the rule list and write it to ``output``.

    Returns:
        Exit code (0 on success)
    """
    print(get_message("cli.update_started", language, url=config.rules.url))

    try:
        async with RuleUpdater(
            url=config.rules.url,
            timeout=config.rules.timeout_seconds,
            logger=logger,
        ) as updater:
            result = await updater.update(output)
    except PSLParserError as e:
        if logger:
            logger.log_error("cli", "Rule update failed", error=e)
        print(get_message("cli.update_failed", language, error=e.message), file=sys.stderr)
        return 1

    print(get_message("cli.update_done", language, count=result.rule_count, path=result.path))
    return 0


def cmd_update_rules(args: argparse.Namespace) -> int:
    """Handle the 'update-rules' command."""
    config = load_cli_config(args)
    if config is None:
        print(f"Error: Could not load config from {args.config}", file=sys.stderr)
        return 1

    if args.url:
        config.rules.url = args.url
    output = Path(args.output) if args.output else config.rules.snapshot_path

    return asyncio.run(update_rules(
        config=config,
        output=output,
        logger=create_logger(config, args.verbose),
        language=_language(args, config),
    ))


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH
    language = args.language

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(get_message("cli.config_missing", language, path=config_path))
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  Language: {config.language}")
        print(f"  Rules URL: {config.rules.url}")
        print(f"  Snapshot: {config.rules.snapshot_path}")
        print(f"  Timeout: {config.rules.timeout_seconds}s")
        print(f"  Log level: {config.logging.level}")
        print(f"  Log format: {config.logging.output_format}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(get_message("cli.config_exists", language, path=config_path))
            return 1

        config = create_default_config(language=language or "en")
        if save_config_to_file(config, config_path):
            print(get_message("cli.config_created", language, path=config_path))
            return 0
        return 1

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file (default: environment / .env)",
    )
    parser.add_argument(
        "--rules", "-r",
        help="Path to a public suffix list file (default: bundled snapshot)",
    )
    parser.add_argument(
        "--language", "-l",
        choices=["en", "de"],
        help="Output language",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="psl-parser",
        description="Split hostnames using the Public Suffix List",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse hostnames and print the results as JSON",
    )
    parse_parser.add_argument(
        "domains",
        nargs="+",
        help="Hostnames to parse (e.g., www.example.co.uk)",
    )
    _add_common_arguments(parse_parser)
    parse_parser.set_defaults(func=cmd_parse)

    get_parser = subparsers.add_parser(
        "get",
        help="Print the registrable domain of a hostname",
    )
    get_parser.add_argument("domain", help="Hostname")
    _add_common_arguments(get_parser)
    get_parser.set_defaults(func=cmd_get)

    is_valid_parser = subparsers.add_parser(
        "is-valid",
        help="Check whether a hostname has a registrable domain under a listed suffix",
    )
    is_valid_parser.add_argument("domain", help="Hostname")
    _add_common_arguments(is_valid_parser)
    is_valid_parser.set_defaults(func=cmd_is_valid)

    update_parser = subparsers.add_parser(
        "update-rules",
        help="Download the public suffix list into a snapshot file",
    )
    update_parser.add_argument(
        "--url",
        help="HTTPS URL of the list (default: publicsuffix.org)",
    )
    update_parser.add_argument(
        "--output", "-o",
        help="File to write (default: configured snapshot path)",
    )
    update_parser.add_argument(
        "--config", "-c",
        help="Path to configuration file (default: environment / .env)",
    )
    update_parser.add_argument(
        "--language", "-l",
        choices=["en", "de"],
        help="Output language",
    )
    update_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    update_parser.set_defaults(func=cmd_update_rules)

    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.add_argument(
        "--language", "-l",
        choices=["en", "de"],
        help="Language for messages and new configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
