"""Lazily populated cache of resolved message trees.

The cache is indexed by (namespace, group, locale). Each entry is the
fully merged tree returned by the message source for that triple. Once a
triple is present it is never fetched again for the lifetime of the cache;
only ``set_loaded`` (wholesale replacement) or direct seeding via
``add_lines`` changes what is stored.

Thread Safety:
    Reads share an RWLock read lock. Population uses double-checked
    locking: the fast path checks under the read lock, the slow path
    re-checks under the write lock before calling the source, so
    concurrent first access to the same triple loads it once and never
    corrupts the index.

Python 3.13+.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from transline.constants import ITEM_SEPARATOR
from transline.core.trees import deep_merge, set_path
from transline.localization.loading import MessageSource
from transline.localization.types import Group, LocaleCode, MessageTree, Namespace
from transline.runtime.rwlock import RWLock

__all__ = ["CatalogCache", "LoadedCatalogs"]

logger = logging.getLogger(__name__)

type LoadedCatalogs = dict[Namespace, dict[Group, dict[LocaleCode, MessageTree]]]
"""Cache index: namespace -> group -> locale -> message tree."""


class CatalogCache:
    """In-memory (namespace, group, locale) -> message tree store.

    Example:
        >>> cache = CatalogCache(ArrayMessageSource().add_messages("en", "auth", {"failed": "No"}))
        >>> cache.get("*", "auth", "en")
        {'failed': 'No'}
        >>> cache.is_loaded("*", "auth", "en")
        True
    """

    __slots__ = ("_loaded", "_lock", "_source")

    def __init__(self, source: MessageSource) -> None:
        """Initialize an empty cache backed by ``source``."""
        self._source = source
        self._loaded: LoadedCatalogs = {}
        self._lock = RWLock()

    @property
    def source(self) -> MessageSource:
        """The message source used to populate misses."""
        return self._source

    def _lookup(self, namespace: Namespace, group: Group, locale: LocaleCode) -> MessageTree | None:
        return self._loaded.get(namespace, {}).get(group, {}).get(locale)

    def is_loaded(self, namespace: Namespace, group: Group, locale: LocaleCode) -> bool:
        """Check whether the triple is already cached."""
        with self._lock.read():
            return self._lookup(namespace, group, locale) is not None

    def get(self, namespace: Namespace, group: Group, locale: LocaleCode) -> MessageTree:
        """Return the tree for the triple, loading it from the source on first access.

        Raises:
            MalformedCatalogError: Propagated from the source; nothing is cached
        """
        with self._lock.read():
            tree = self._lookup(namespace, group, locale)
            if tree is not None:
                return tree

        with self._lock.write():
            tree = self._lookup(namespace, group, locale)
            if tree is not None:
                return tree

            tree = self._source.load(locale, group, namespace)
            self._loaded.setdefault(namespace, {}).setdefault(group, {})[locale] = tree
            logger.debug(
                "Loaded catalog %s::%s [%s] (%d top-level keys)",
                namespace,
                group,
                locale,
                len(tree),
            )
            return tree

    def add_lines(
        self, lines: Mapping[str, Any], locale: LocaleCode, namespace: Namespace
    ) -> None:
        """Seed lines directly, bypassing the source.

        Each key has the form ``group.item`` (split on the first dot); the
        item may address nested structure. A seeded triple counts as loaded,
        so the source is never consulted for it afterwards.

        Raises:
            ValueError: If a key has no item part and its value is not a mapping
        """
        with self._lock.write():
            for key, value in lines.items():
                group, sep, item = key.partition(ITEM_SEPARATOR)
                groups = self._loaded.setdefault(namespace, {}).setdefault(group, {})
                tree = groups.setdefault(locale, {})
                if sep:
                    set_path(tree, item, copy.deepcopy(value))
                elif isinstance(value, Mapping):
                    groups[locale] = deep_merge(tree, copy.deepcopy(value))
                else:
                    msg = f"Line key must have the form 'group.item', got '{key}'"
                    raise ValueError(msg)

    def set_loaded(self, loaded: LoadedCatalogs) -> None:
        """Replace the whole cache (test seeding, snapshot restore).

        The cache keeps a deep copy; later seeding never writes into ``loaded``.
        """
        loaded = copy.deepcopy(loaded)
        with self._lock.write():
            self._loaded = loaded
        logger.info("Catalog cache replaced (%d namespaces)", len(loaded))

    def snapshot(self) -> LoadedCatalogs:
        """Return a copy of the cache index suitable for ``set_loaded``.

        Trees are deep-copied: later ``add_lines`` calls on this cache do
        not leak into the snapshot.
        """
        with self._lock.read():
            return copy.deepcopy(self._loaded)
