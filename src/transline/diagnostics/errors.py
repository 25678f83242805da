"""Translation exception hierarchy.

A missing translation is deliberately NOT an exception: the translator
returns the requested key so that gaps stay visible in rendered output.
The exceptions below cover usage errors and unreadable catalogs only.

Hierarchy:
    TranslationError (base)
    ├─ InvalidLocaleError (locale contains a path separator)
    └─ MalformedCatalogError (flat JSON catalog exists but cannot be parsed)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "InvalidLocaleError",
    "MalformedCatalogError",
    "TranslationError",
]


class TranslationError(Exception):
    """Base exception for all transline errors."""


class InvalidLocaleError(TranslationError, ValueError):
    """Locale code cannot be used to address message files.

    Raised synchronously by ``Translator.set_locale`` (and at construction)
    when the locale contains a path separator. Never swallowed.

    Subclasses ValueError so callers validating user input with
    ``except ValueError`` keep working.

    Attributes:
        locale: The rejected locale string
    """

    def __init__(self, message: str, *, locale: str = "") -> None:
        """Initialize InvalidLocaleError.

        Args:
            message: Error message
            locale: The rejected locale string
        """
        super().__init__(message)
        self.locale = locale


class MalformedCatalogError(TranslationError):
    """Flat catalog file exists but is not a well-formed JSON object.

    Fatal to the lookup that triggered the load; the calling code decides
    whether to degrade to the key or abort. Grouped (YAML) files never raise
    this error: their structure is the storage collaborator's concern.

    Attributes:
        path: Path of the offending catalog file
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        """Initialize MalformedCatalogError.

        Args:
            message: Error message
            path: Path of the offending catalog file
        """
        super().__init__(message)
        self.path = path
