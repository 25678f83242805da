"""Message sources and storage for the translator.

Submodules:
    types      - PEP 695 type aliases (LocaleCode, Namespace, Group, MessageTree)
    filesystem - Filesystem protocol and LocalFilesystem (PyYAML-backed)
    loading    - MessageSource protocol, FileMessageSource, ArrayMessageSource

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from transline.localization.filesystem import Filesystem, LocalFilesystem
from transline.localization.loading import (
    ArrayMessageSource,
    FileMessageSource,
    MessageSource,
)
from transline.localization.types import (
    Group,
    LocaleCode,
    MessageTree,
    Namespace,
    Replacements,
)

__all__ = [
    # Source protocol and implementations
    "MessageSource",
    "FileMessageSource",
    "ArrayMessageSource",
    # Storage collaborator
    "Filesystem",
    "LocalFilesystem",
    # Type aliases for user code type annotations
    "Group",
    "LocaleCode",
    "MessageTree",
    "Namespace",
    "Replacements",
]
