"""
Internationalization (i18n) for CLI output.

Provides English and German translations of user-facing CLI messages.
The English validation messages are the fixed messages returned in parse
results; the German ones are for display only.
"""

from typing import Optional

from .enums import ValidationErrorCode
from .validator import ERROR_MESSAGES


SUPPORTED_LANGUAGES = frozenset({"en", "de"})
DEFAULT_LANGUAGE = "en"


# Structure: {message_key: {language_code: translated_message}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    "validation.DOMAIN_TOO_SHORT": {
        "en": ERROR_MESSAGES[ValidationErrorCode.DOMAIN_TOO_SHORT],
        "de": "Domainname zu kurz.",
    },
    "validation.DOMAIN_TOO_LONG": {
        "en": ERROR_MESSAGES[ValidationErrorCode.DOMAIN_TOO_LONG],
        "de": "Domainname zu lang. Er darf höchstens 255 Zeichen haben.",
    },
    "validation.LABEL_STARTS_WITH_DASH": {
        "en": ERROR_MESSAGES[ValidationErrorCode.LABEL_STARTS_WITH_DASH],
        "de": "Ein Label des Domainnamens darf nicht mit einem Bindestrich beginnen.",
    },
    "validation.LABEL_ENDS_WITH_DASH": {
        "en": ERROR_MESSAGES[ValidationErrorCode.LABEL_ENDS_WITH_DASH],
        "de": "Ein Label des Domainnamens darf nicht mit einem Bindestrich enden.",
    },
    "validation.LABEL_TOO_LONG": {
        "en": ERROR_MESSAGES[ValidationErrorCode.LABEL_TOO_LONG],
        "de": "Ein Label des Domainnamens darf höchstens 63 Zeichen lang sein.",
    },
    "validation.LABEL_TOO_SHORT": {
        "en": ERROR_MESSAGES[ValidationErrorCode.LABEL_TOO_SHORT],
        "de": "Ein Label des Domainnamens muss mindestens 1 Zeichen lang sein.",
    },
    "validation.LABEL_INVALID_CHARS": {
        "en": ERROR_MESSAGES[ValidationErrorCode.LABEL_INVALID_CHARS],
        "de": "Ein Label des Domainnamens darf nur alphanumerische Zeichen oder Bindestriche enthalten.",
    },

    # CLI messages
    "cli.invalid_domain": {
        "en": "Invalid domain '{domain}': {message}",
        "de": "Ungültige Domain '{domain}': {message}",
    },
    "cli.no_domain": {
        "en": "No registrable domain found for '{domain}'",
        "de": "Keine registrierbare Domain für '{domain}' gefunden",
    },
    "cli.valid": {
        "en": "'{domain}' is a registrable domain under a listed suffix",
        "de": "'{domain}' ist eine registrierbare Domain unter einem gelisteten Suffix",
    },
    "cli.not_valid": {
        "en": "'{domain}' is not a registrable domain under a listed suffix",
        "de": "'{domain}' ist keine registrierbare Domain unter einem gelisteten Suffix",
    },
    "cli.rules_load_failed": {
        "en": "Could not load rules: {error}",
        "de": "Regeln konnten nicht geladen werden: {error}",
    },
    "cli.update_started": {
        "en": "Downloading public suffix list from {url}",
        "de": "Lade Public-Suffix-Liste von {url}",
    },
    "cli.update_done": {
        "en": "Wrote {count} rules to {path}",
        "de": "{count} Regeln nach {path} geschrieben",
    },
    "cli.update_failed": {
        "en": "Rule update failed: {error}",
        "de": "Aktualisierung der Regeln fehlgeschlagen: {error}",
    },
    "cli.config_missing": {
        "en": "No configuration found at: {path}",
        "de": "Keine Konfiguration gefunden unter: {path}",
    },
    "cli.config_exists": {
        "en": "Configuration already exists at: {path}. Use --force to overwrite.",
        "de": "Konfiguration existiert bereits unter: {path}. Mit --force überschreiben.",
    },
    "cli.config_created": {
        "en": "Configuration created at: {path}",
        "de": "Konfiguration erstellt unter: {path}",
    },
}


def get_message(
    key: str,
    language: Optional[str] = None,
    **kwargs,
) -> str:
    """
    Get a translated message by key.

    Falls back to the default language, then to the key itself.

    Args:
        key: The message key (e.g., 'cli.valid')
        language: Language code ('en' or 'de'), defaults to DEFAULT_LANGUAGE
        **kwargs: Format arguments for the message template
    """
    if language is None or language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key)
    if translations is None:
        return key

    message = translations.get(language)
    if message is None:
        message = translations.get(DEFAULT_LANGUAGE)

    if message is None:
        return key

    if kwargs:
        try:
            message = message.format(**kwargs)
        except KeyError:
            pass

    return message


def get_validation_message(code: ValidationErrorCode, language: Optional[str] = None) -> str:
    """Get the translated message for a validation error code."""
    return get_message(f"validation.{code.value}", language)


def get_missing_translations(language: str) -> set[str]:
    """Get all message keys that are missing translations for a language."""
    return {
        key for key, translations in TRANSLATIONS.items()
        if language not in translations
    }
