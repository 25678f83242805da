"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user
code when annotating translator call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import Any

__all__ = [
    "Group",
    "LocaleCode",
    "MessageTree",
    "Namespace",
    "Replacements",
]

type LocaleCode = str
"""Opaque locale identifier (e.g., 'en', 'pt_BR'); never contains path separators."""

type Namespace = str
"""Logical message package (e.g., 'courier'); '*' is the default space."""

type Group = str
"""Name of one grouped message file (e.g., 'validation', 'auth')."""

type MessageTree = dict[str, Any]
"""Nested mapping of item-path segments to strings or further trees."""

type Replacements = dict[str, Any]
"""Placeholder values keyed by placeholder name (without the leading colon)."""
