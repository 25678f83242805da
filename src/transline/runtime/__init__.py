"""Runtime: translator, catalog cache, fallback, substitution and plural selection.

Python 3.13+.
"""

from .catalog_cache import CatalogCache, LoadedCatalogs
from .fallback import locale_chain
from .locale_context import LocaleContext
from .plural_rules import plural_family, plural_index
from .replacements import StringableRegistry, make_replacements
from .selector import MessageSelector
from .translator import MissingKeyCallback, Translator

__all__ = [
    "CatalogCache",
    "LoadedCatalogs",
    "LocaleContext",
    "MessageSelector",
    "MissingKeyCallback",
    "StringableRegistry",
    "Translator",
    "locale_chain",
    "make_replacements",
    "plural_family",
    "plural_index",
]
