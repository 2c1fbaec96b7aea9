"""
Configuration for the PSL parser.

Defines the configuration dataclasses and loads them from a JSON file or
from environment variables (a ``.env`` file is read via python-dotenv).
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .enums import LogLevel
from .rules import DEFAULT_RULES_PATH


PUBLIC_SUFFIX_LIST_URL = "https://publicsuffix.org/list/effective_tld_names.dat"
DEFAULT_CONFIG_PATH = Path.home() / ".psl_parser" / "config.json"


@dataclass
class RuleSourceConfig:
    """Where the rule list is downloaded from and stored."""

    url: str = PUBLIC_SUFFIX_LIST_URL
    snapshot_path: Path = DEFAULT_RULES_PATH
    timeout_seconds: float = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json', 'text', 'both'

    @property
    def log_level(self) -> LogLevel:
        return LogLevel(self.level)


@dataclass
class SystemConfig:
    """Main configuration combining all sub-configurations."""

    rules: RuleSourceConfig = field(default_factory=RuleSourceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    language: str = "en"  # 'en' or 'de'


def create_default_config(language: str = "en") -> SystemConfig:
    """Create a configuration with default settings."""
    return SystemConfig(
        rules=RuleSourceConfig(),
        logging=LoggingConfig(),
        language=language,
    )


def config_from_dict(data: dict) -> SystemConfig:
    """
    Build a SystemConfig from a parsed JSON document.

    Missing sections and keys fall back to defaults.

    Raises:
        ValueError: If a log level is not one of the known levels
    """
    rules_data = data.get("rules", {})
    snapshot_path = rules_data.get("snapshot_path")
    rules = RuleSourceConfig(
        url=rules_data.get("url", PUBLIC_SUFFIX_LIST_URL),
        snapshot_path=Path(snapshot_path) if snapshot_path else DEFAULT_RULES_PATH,
        timeout_seconds=float(rules_data.get("timeout_seconds", 30.0)),
    )

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level", "info"),
        output_format=logging_data.get("output_format", "text"),
    )
    if logging_config.level not in {lvl.value for lvl in LogLevel}:
        raise ValueError(f"Invalid log level: {logging_config.level}")

    return SystemConfig(
        rules=rules,
        logging=logging_config,
        language=data.get("language", "en"),
    )


def config_to_dict(config: SystemConfig) -> dict:
    """Convert a SystemConfig to a JSON-serializable dictionary."""
    return {
        "rules": {
            "url": config.rules.url,
            "snapshot_path": str(config.rules.snapshot_path),
            "timeout_seconds": config.rules.timeout_seconds,
        },
        "logging": {
            "level": config.logging.level,
            "output_format": config.logging.output_format,
        },
        "language": config.language,
    }


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig if successful, None if the file is missing or invalid
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return config_from_dict(data)
    except FileNotFoundError:
        return None
    except (json.JSONDecodeError, AttributeError, TypeError, ValueError):
        return None


def save_config_to_file(config: SystemConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)
        return True
    except OSError:
        return False


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def load_config_from_env(dotenv_path: Optional[Path] = None) -> SystemConfig:
    """
    Load configuration from environment variables.

    Reads ``.env`` (or ``dotenv_path``) first without overriding variables
    already set. Recognized variables: PSL_RULES_URL, PSL_SNAPSHOT_PATH,
    PSL_TIMEOUT, PSL_LOG_LEVEL, PSL_LOG_FORMAT, PSL_LANGUAGE.
    """
    load_dotenv(dotenv_path)

    snapshot_path = os.getenv("PSL_SNAPSHOT_PATH", "").strip()
    language = (os.getenv("PSL_LANGUAGE", "en") or "en").lower()
    if language not in ("en", "de"):
        language = "en"

    level = (os.getenv("PSL_LOG_LEVEL", "info") or "info").lower()
    if level not in {lvl.value for lvl in LogLevel}:
        level = "info"

    output_format = (os.getenv("PSL_LOG_FORMAT", "text") or "text").lower()
    if output_format not in ("json", "text", "both"):
        output_format = "text"

    return SystemConfig(
        rules=RuleSourceConfig(
            url=os.getenv("PSL_RULES_URL", PUBLIC_SUFFIX_LIST_URL).strip() or PUBLIC_SUFFIX_LIST_URL,
            snapshot_path=Path(snapshot_path) if snapshot_path else DEFAULT_RULES_PATH,
            timeout_seconds=_float_env("PSL_TIMEOUT", 30.0),
        ),
        logging=LoggingConfig(level=level, output_format=output_format),
        language=language,
    )
