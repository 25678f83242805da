"""Locale utilities: validation, BCP-47 to POSIX conversion, Babel parsing.

Locales are opaque identifiers for message lookup that also end up in file
paths. ``validate_locale`` runs when a translator is constructed, on
``Translator.set_locale`` and in ``TranslatorConfig``. Per-call ``locale``
arguments (``get``, ``has``, ``choice``, ``load``, ``add_lines``) are used as
given. Babel is only consulted to derive a language subtag for
plural-family lookup.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError

from transline.constants import LOCALE_FORBIDDEN_CHARACTERS
from transline.diagnostics import InvalidLocaleError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "language_subtag",
    "normalize_locale",
    "validate_locale",
]

logger = logging.getLogger(__name__)


def validate_locale(locale_code: str) -> str:
    """Reject locale codes that could escape the locale directory.

    Args:
        locale_code: Locale code to validate

    Returns:
        The locale code unchanged

    Raises:
        InvalidLocaleError: If locale contains a path separator

    Example:
        >>> validate_locale("pt_BR")
        'pt_BR'
        >>> validate_locale("../etc")
        Traceback (most recent call last):
        ...
        transline.diagnostics.errors.InvalidLocaleError: Invalid characters present in locale: '../etc'
    """
    if any(char in locale_code for char in LOCALE_FORBIDDEN_CHARACTERS):
        msg = f"Invalid characters present in locale: '{locale_code}'"
        raise InvalidLocaleError(msg, locale=locale_code)
    return locale_code


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


@functools.lru_cache(maxsize=128)
def language_subtag(locale_code: str) -> str:
    """Return the language part of a locale code.

    Babel resolves aliases and scripts ("zh_Hant_TW" -> "zh", "iw" -> "he").
    Locales Babel does not know fall back to the text before the first
    separator, so private or application-specific codes still work.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Lower-case language subtag (may be empty for an empty locale)

    Example:
        >>> language_subtag("de-AT")
        'de'
        >>> language_subtag("xx_custom")
        'xx'
    """
    try:
        return get_babel_locale(locale_code).language
    except (UnknownLocaleError, ValueError) as e:
        logger.debug("Babel cannot parse locale '%s': %s", locale_code, e)
        return normalize_locale(locale_code).split("_", 1)[0].lower()
