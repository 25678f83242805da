"""Error types for transline.

Python 3.13+. Zero external dependencies.
"""

from .errors import InvalidLocaleError, MalformedCatalogError, TranslationError

__all__ = [
    "InvalidLocaleError",
    "MalformedCatalogError",
    "TranslationError",
]
