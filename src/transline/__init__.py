"""transline - layered message resolution with placeholders and plurals.

Resolves human-readable messages by key and locale from layered sources:
grouped YAML files deep-merged across directories and namespaces, and flat
per-locale JSON catalogs keyed by the whole source string. Resolved lines
get ``:placeholder`` substitution; pipe-delimited lines select a plural
form for a count.

Public API:
    Translator - Key resolution, fallback, placeholders and plurals
    TranslatorConfig - Frozen configuration (locales, paths, extension)
    create_translator - Build a Translator from a TranslatorConfig
    FileMessageSource - Grouped YAML + flat JSON files on a Filesystem
    ArrayMessageSource - In-memory message source
    MessageSelector - Plural segment selection
    PotentiallyTranslatedString - String with an optional translation
    trans / trans_choice - Free functions using the registered translator

Exceptions:
    TranslationError - Base exception class
    InvalidLocaleError - Locale code containing a path separator
    MalformedCatalogError - Flat catalog that is not a JSON object

Submodules:
    transline.core - Key parsing and message tree helpers
    transline.localization - Message sources and storage
    transline.runtime - Translator, catalog cache, plural rules
    transline.factory - Process-wide translator registry

The library configures no logging handlers; the ``transline`` logger has a
NullHandler so applications opt in to its output.
"""

import logging

from .config import TranslatorConfig
from .diagnostics import InvalidLocaleError, MalformedCatalogError, TranslationError
from .factory import create_translator, get_translator, set_translator
from .functions import trans, trans_choice
from .localization import ArrayMessageSource, FileMessageSource, LocalFilesystem
from .runtime import MessageSelector, Translator
from .translated import PendingTranslatedString, PotentiallyTranslatedString

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("transline")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArrayMessageSource",
    "FileMessageSource",
    "InvalidLocaleError",
    "LocalFilesystem",
    "MalformedCatalogError",
    "MessageSelector",
    "PendingTranslatedString",
    "PotentiallyTranslatedString",
    "TranslationError",
    "Translator",
    "TranslatorConfig",
    "__version__",
    "create_translator",
    "get_translator",
    "set_translator",
    "trans",
    "trans_choice",
]
