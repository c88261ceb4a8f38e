"""Locale selection and localized label lookup.

Labels are plain ``{locale: text}`` mappings; lookups fall back explicitly
instead of relying on exceptions.
"""

from collections.abc import Mapping
from typing import Literal, cast

from web3journey.config.settings import get_settings


Locale = Literal["zh", "en"]

SUPPORTED_LOCALES: tuple[Locale, ...] = ("zh", "en")
FALLBACK_LOCALE: Locale = "en"


def resolve_locale(value: str | None) -> Locale:
    """Normalize a requested locale, defaulting to the configured one."""
    candidate = (value or get_settings().DEFAULT_LOCALE).lower().split("-")[0]
    if candidate in SUPPORTED_LOCALES:
        return cast(Locale, candidate)
    return FALLBACK_LOCALE


def localized(labels: Mapping[str, str], locale: Locale, default: str = "") -> str:
    """Label for ``locale``, else the fallback locale's, else ``default``."""
    return labels.get(locale) or labels.get(FALLBACK_LOCALE) or default


def humanize_id(slug: str) -> str:
    """``defi-development`` -> ``Defi Development``."""
    return " ".join(part.capitalize() for part in slug.replace("_", "-").split("-") if part)
