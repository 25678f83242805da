"""Message sources: where translation lines come from.

Provides the protocol every message source implements, the layered file
source used in applications, and an in-memory source for tests and
programmatic catalogs.

Components:
    MessageSource - Protocol for loading message trees (structural typing)
    FileMessageSource - Grouped YAML files + flat JSON catalogs on a Filesystem
    ArrayMessageSource - In-memory messages keyed by namespace/locale/group

Layering (FileMessageSource):
    Grouped files are deep-merged across the registered paths in
    registration order, later paths winning. Namespaced groups start from
    the namespace's hinted path and are overridden by
    ``{path}/vendor/{namespace}/...`` files found in the default paths.
    Flat catalogs are shallow-merged: JSON paths first, then default paths.

Python 3.13+.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterable, Mapping
from functools import reduce
from typing import Any, Protocol

from transline.constants import (
    DEFAULT_EXTENSION,
    DEFAULT_NAMESPACE,
    FLAT_EXTENSION,
    FLAT_GROUP,
    VENDOR_DIRECTORY,
)
from transline.core.trees import deep_merge
from transline.diagnostics import MalformedCatalogError
from transline.enums import LoadStatus
from transline.localization.filesystem import Filesystem, LocalFilesystem
from transline.localization.types import Group, LocaleCode, MessageTree, Namespace

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "MessageSource",
    # Concrete sources
    "FileMessageSource",
    "ArrayMessageSource",
]

logger = logging.getLogger(__name__)


class MessageSource(Protocol):
    """Protocol for providers of translation lines.

    ``load`` returns the message tree for one (locale, group, namespace).
    The ("*", "*") group/namespace pair requests the flat per-locale catalog.
    Registration methods may be no-ops for sources without a path concept.
    """

    def load(
        self, locale: LocaleCode, group: Group, namespace: Namespace | None = None
    ) -> MessageTree:
        """Load the messages for the given locale, group and namespace."""

    def add_namespace(self, namespace: Namespace, hint: str) -> None:
        """Register the base path of a namespace."""

    def add_path(self, path: str) -> None:
        """Register an additional default path."""

    def add_json_path(self, path: str) -> None:
        """Register an additional path for flat JSON catalogs."""

    def namespaces(self) -> dict[Namespace, str]:
        """Return the registered namespace hints."""


class FileMessageSource:
    """Message source reading grouped YAML files and flat JSON catalogs.

    File layout:
        {path}/{locale}/{group}.yaml                       grouped messages
        {hint}/{locale}/{group}.yaml                       namespaced base
        {path}/vendor/{namespace}/{locale}/{group}.yaml    namespaced override
        {path}/{locale}.json                               flat catalog

    Missing files are skipped: every layer is optional.

    Example:
        >>> source = FileMessageSource(LocalFilesystem(), ["lang"])
        >>> source.add_namespace("courier", "vendor_pkgs/courier/lang")
        >>> source.load("en", "mail", "courier")
        {'subject': 'Your parcel has shipped'}

    Attributes:
        files: Storage collaborator
        extension: Extension of grouped message files (default ".yaml")
    """

    __slots__ = ("_hints", "_json_paths", "_paths", "extension", "files")

    def __init__(
        self,
        files: Filesystem | None = None,
        path: str | Iterable[str] = (),
        *,
        extension: str = DEFAULT_EXTENSION,
    ) -> None:
        """Initialize file message source.

        Args:
            files: Storage collaborator (defaults to LocalFilesystem)
            path: One default path or an iterable of paths, lowest priority first
            extension: Extension of grouped message files, including the dot
        """
        self.files: Filesystem = files if files is not None else LocalFilesystem()
        self._paths: list[str] = [path] if isinstance(path, str) else list(path)
        self._json_paths: list[str] = []
        self._hints: dict[Namespace, str] = {}
        self.extension = extension

    def load(
        self, locale: LocaleCode, group: Group, namespace: Namespace | None = None
    ) -> MessageTree:
        """Load the messages for the given locale.

        Args:
            locale: Locale code
            group: Group name, or "*" together with namespace "*" for the flat catalog
            namespace: Namespace, None or "*" for the default space

        Returns:
            Merged message tree (empty when no layer exists)

        Raises:
            MalformedCatalogError: If a flat catalog file cannot be parsed
        """
        if group == FLAT_GROUP and namespace == DEFAULT_NAMESPACE:
            return self.load_json(locale)

        if namespace is None or namespace == DEFAULT_NAMESPACE:
            return self._load_paths(self._paths, locale, group)

        return self._load_namespaced(locale, group, namespace)

    def _load_namespaced(
        self, locale: LocaleCode, group: Group, namespace: Namespace
    ) -> MessageTree:
        """Load a namespaced group: hinted base plus vendor overrides."""
        hint = self._hints.get(namespace)
        if hint is None:
            logger.debug("No hint registered for namespace '%s'", namespace)
            return {}

        lines = self._load_paths([hint], locale, group)
        return self._load_namespace_overrides(lines, locale, group, namespace)

    def _load_namespace_overrides(
        self, lines: MessageTree, locale: LocaleCode, group: Group, namespace: Namespace
    ) -> MessageTree:
        """Deep-merge ``vendor/{namespace}`` overrides from every default path."""
        return reduce(
            lambda output, path: self._merge_file(
                output,
                f"{path}/{VENDOR_DIRECTORY}/{namespace}/{locale}/{group}{self.extension}",
            ),
            self._paths,
            lines,
        )

    def _load_paths(self, paths: Iterable[str], locale: LocaleCode, group: Group) -> MessageTree:
        """Deep-merge ``{path}/{locale}/{group}`` across paths, later winning."""
        return reduce(
            lambda output, path: self._merge_file(
                output, f"{path}/{locale}/{group}{self.extension}"
            ),
            paths,
            {},
        )

    def _merge_file(self, output: MessageTree, full_path: str) -> MessageTree:
        """Deep-merge one grouped file onto ``output`` if it exists."""
        status = LoadStatus.SKIPPED
        if self.files.exists(full_path):
            lines = self.files.get_require(full_path)
            if isinstance(lines, Mapping):
                output = deep_merge(output, lines)
                status = LoadStatus.MERGED
            else:
                logger.warning(
                    "Ignoring %s: expected a mapping, got %s", full_path, type(lines).__name__
                )
        logger.debug("Layer %s: %s", full_path, status)
        return output

    def load_json(self, locale: LocaleCode) -> MessageTree:
        """Load the flat catalog for ``locale`` from JSON paths, then default paths.

        Documents are shallow-merged: a later file replaces whole entries.

        Raises:
            MalformedCatalogError: If an existing file is not a JSON object
        """
        output: MessageTree = {}
        for path in [*self._json_paths, *self._paths]:
            full_path = f"{path}/{locale}{FLAT_EXTENSION}"
            if not self.files.exists(full_path):
                continue

            try:
                decoded = json.loads(self.files.get(full_path))
            except json.JSONDecodeError as e:
                msg = f"Translation file [{full_path}] contains an invalid JSON structure."
                raise MalformedCatalogError(msg, path=full_path) from e

            if not isinstance(decoded, dict):
                msg = f"Translation file [{full_path}] contains an invalid JSON structure."
                raise MalformedCatalogError(msg, path=full_path)

            output.update(decoded)
            logger.debug("Layer %s: %s", full_path, LoadStatus.MERGED)
        return output

    def add_namespace(self, namespace: Namespace, hint: str) -> None:
        """Add a new namespace to the source."""
        self._hints[namespace] = hint
        logger.info("Registered namespace '%s' at %s", namespace, hint)

    def namespaces(self) -> dict[Namespace, str]:
        """Get all registered namespace hints."""
        return dict(self._hints)

    def add_path(self, path: str) -> None:
        """Add a new default path; it takes priority over earlier paths."""
        self._paths.append(path)
        logger.info("Registered translation path %s", path)

    def add_json_path(self, path: str) -> None:
        """Add a new JSON path; default paths still take priority over it."""
        self._json_paths.append(path)
        logger.info("Registered JSON translation path %s", path)

    def paths(self) -> list[str]:
        """Get all registered default paths."""
        return list(self._paths)

    def json_paths(self) -> list[str]:
        """Get all registered JSON paths."""
        return list(self._json_paths)


class ArrayMessageSource:
    """In-memory message source.

    Useful for tests and for catalogs built in code. Path and namespace
    registration are accepted and ignored.

    Example:
        >>> source = ArrayMessageSource().add_messages("en", "auth", {"failed": "Bad credentials"})
        >>> source.load("en", "auth")
        {'failed': 'Bad credentials'}
    """

    __slots__ = ("_messages",)

    def __init__(self) -> None:
        """Initialize with no messages."""
        self._messages: dict[Namespace, dict[LocaleCode, dict[Group, MessageTree]]] = {}

    def load(
        self, locale: LocaleCode, group: Group, namespace: Namespace | None = None
    ) -> MessageTree:
        """Load a private copy of the messages for the given locale."""
        namespace = namespace or DEFAULT_NAMESPACE
        return copy.deepcopy(self._messages.get(namespace, {}).get(locale, {}).get(group, {}))

    def add_messages(
        self,
        locale: LocaleCode,
        group: Group,
        messages: Mapping[str, Any],
        namespace: Namespace | None = None,
    ) -> ArrayMessageSource:
        """Replace the messages of one group; returns self for chaining."""
        namespace = namespace or DEFAULT_NAMESPACE
        self._messages.setdefault(namespace, {}).setdefault(locale, {})[group] = copy.deepcopy(
            dict(messages)
        )
        return self

    def add_namespace(self, namespace: Namespace, hint: str) -> None:
        """Namespaces need no registration in memory."""

    def add_path(self, path: str) -> None:
        """Paths are meaningless in memory."""

    def add_json_path(self, path: str) -> None:
        """Paths are meaningless in memory."""

    def namespaces(self) -> dict[Namespace, str]:
        """In-memory sources have no namespace hints."""
        return {}
