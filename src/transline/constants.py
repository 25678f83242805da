"""Shared constants for transline.

Centralizes the sentinels and file-layout conventions used by the key
parser, the message sources and the translator. Placing them here avoids
circular imports between the localization and runtime packages.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Sentinels
    "DEFAULT_NAMESPACE",
    "FLAT_GROUP",
    "NAMESPACE_SEPARATOR",
    "ITEM_SEPARATOR",
    # File layout
    "DEFAULT_EXTENSION",
    "FLAT_EXTENSION",
    "VENDOR_DIRECTORY",
    # Plural selection
    "PLURAL_SEPARATOR",
    # Locale validation
    "LOCALE_FORBIDDEN_CHARACTERS",
    # Configuration defaults
    "DEFAULT_LOCALE",
    "DEFAULT_FALLBACK_LOCALE",
]

# ============================================================================
# SENTINELS
# ============================================================================

# The unnamespaced message space. Together with FLAT_GROUP it also marks the
# flat per-locale JSON catalog inside the catalog cache.
DEFAULT_NAMESPACE: str = "*"

# Group sentinel for flat catalogs ("*", "*", locale).
FLAT_GROUP: str = "*"

# "package::group.item"
NAMESPACE_SEPARATOR: str = "::"

# "group.item.nested"
ITEM_SEPARATOR: str = "."

# ============================================================================
# FILE LAYOUT
# ============================================================================

# Grouped message files: {path}/{locale}/{group}.yaml
DEFAULT_EXTENSION: str = ".yaml"

# Flat catalogs: {path}/{locale}.json
FLAT_EXTENSION: str = ".json"

# Namespace overrides: {path}/vendor/{namespace}/{locale}/{group}.yaml
VENDOR_DIRECTORY: str = "vendor"

# ============================================================================
# PLURAL SELECTION
# ============================================================================

PLURAL_SEPARATOR: str = "|"

# ============================================================================
# LOCALE VALIDATION
# ============================================================================

# Locales are interpolated into file paths; separators would allow a locale
# to address files outside the locale directory.
LOCALE_FORBIDDEN_CHARACTERS: tuple[str, ...] = ("/", "\\")

# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================

# Mirrors the "app.locale" / "app.fallback_locale" defaults.
DEFAULT_LOCALE: str = "en"
DEFAULT_FALLBACK_LOCALE: str = "en"
