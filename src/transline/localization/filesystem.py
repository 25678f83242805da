"""Storage collaborator used by the file message source.

The message source never touches the disk directly; it asks a Filesystem
whether a path exists, for raw text (flat JSON catalogs) and for a
structured document (grouped YAML files). Tests substitute an in-memory or
call-counting implementation.

Python 3.13+. Depends on PyYAML for grouped message files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import yaml

__all__ = ["Filesystem", "LocalFilesystem"]


class Filesystem(Protocol):
    """Protocol for synchronous, side-effect-free reads.

    This is a Protocol (structural typing) rather than ABC so that any
    object with matching methods can serve as storage.
    """

    def exists(self, path: str) -> bool:
        """Return True if ``path`` names an existing file."""

    def get(self, path: str) -> str:
        """Return the text content of ``path``.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """

    def get_require(self, path: str) -> Any:
        """Return the structured document stored at ``path``.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read
        """


class LocalFilesystem:
    """Filesystem backed by the local disk.

    Text is read as UTF-8. Structured documents are YAML, loaded with
    ``yaml.safe_load`` so that message files cannot instantiate objects.
    JSON is a subset of YAML, so ``.json`` group files load as well.

    Example:
        >>> files = LocalFilesystem()
        >>> files.exists("lang/en/auth.yaml")
        True
        >>> files.get_require("lang/en/auth.yaml")
        {'failed': 'These credentials do not match our records.'}
    """

    __slots__ = ()

    def exists(self, path: str) -> bool:
        """Return True if ``path`` is an existing regular file."""
        return Path(path).is_file()

    def get(self, path: str) -> str:
        """Read ``path`` as UTF-8 text."""
        return Path(path).read_text(encoding="utf-8")

    def get_require(self, path: str) -> Any:
        """Parse ``path`` as a YAML document; an empty document yields {}."""
        with Path(path).open(encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}
