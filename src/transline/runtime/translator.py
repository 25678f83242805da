"""The translator: resolves translation keys to display strings.

Resolution of ``get(key)``:
    1. The flat catalog of the locale is consulted for the whole key
       ("Welcome back!" -> "Bon retour !").
    2. Otherwise the key is parsed into (namespace, group, item) and every
       locale of the fallback chain is tried through the catalog cache;
       the first hit wins.
    3. If nothing matched, the missing-key callback may rewrite the key,
       and the (possibly rewritten) key is displayed.

Every returned string passes through placeholder substitution. Plural
lines are handled by ``choice``, which hands the resolved line to a
MessageSelector before substituting placeholders.

Thread Safety:
    The current locale and the missing-key guard are context-local
    (``contextvars``), so concurrent requests sharing a translator never
    observe each other's locale. The catalog cache is lock-protected.
    Registration methods (paths, namespaces, hooks, stringable handlers)
    are meant to be called during application setup.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sized
from contextlib import AbstractContextManager
from functools import partial
from typing import TYPE_CHECKING, Any, Self

from transline.constants import DEFAULT_NAMESPACE, FLAT_GROUP
from transline.core.keys import KeyParser, ParsedKey
from transline.core.trees import get_path, map_leaves
from transline.runtime.catalog_cache import CatalogCache, LoadedCatalogs
from transline.runtime.fallback import DetermineLocales, locale_chain
from transline.runtime.locale_context import LocaleContext, ScopedFlag
from transline.runtime.replacements import (
    StringableHandler,
    StringableRegistry,
    make_replacements,
)
from transline.runtime.selector import MessageSelector

if TYPE_CHECKING:
    from transline.localization.loading import MessageSource
    from transline.localization.types import (
        Group,
        LocaleCode,
        MessageTree,
        Namespace,
    )
    from transline.runtime.plural_rules import Count

__all__ = ["MissingKeyCallback", "Translator"]

logger = logging.getLogger(__name__)

type MissingKeyCallback = Callable[
    [str, Mapping[str, Any], str, bool], str | None
]
"""(key, replace, locale, fallback) -> replacement key, or None to keep the key."""


class Translator:
    """Resolves translation keys against layered message sources.

    Example:
        >>> source = FileMessageSource(LocalFilesystem(), ["lang"])
        >>> translator = Translator(source, "fr", fallback="en")
        >>> translator.get("auth.failed")
        'Identifiants incorrects.'
        >>> translator.get("messages.welcome", {"name": "sam"})
        'Bienvenue, sam !'
        >>> translator.choice("messages.apples", 5)
        '5 pommes'

    Attributes:
        locale: Current locale of the calling context (read-only property)
    """

    __slots__ = (
        "_cache",
        "_determine_locales",
        "_fallback",
        "_handle_missing_keys",
        "_keys",
        "_loader",
        "_locale",
        "_missing_key_callback",
        "_selector",
        "_stringables",
    )

    def __init__(
        self,
        loader: MessageSource,
        locale: LocaleCode,
        *,
        fallback: LocaleCode | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            loader: Message source populating the catalog cache
            locale: Default locale, used by contexts that never set one
            fallback: Locale tried after the requested one

        Raises:
            InvalidLocaleError: If locale contains a path separator
        """
        self._loader = loader
        self._cache = CatalogCache(loader)
        self._locale = LocaleContext(locale)
        self._fallback = fallback
        self._selector: MessageSelector | None = None
        self._determine_locales: DetermineLocales | None = None
        self._stringables = StringableRegistry()
        self._missing_key_callback: MissingKeyCallback | None = None
        self._handle_missing_keys = ScopedFlag("transline_handle_missing_keys")
        self._keys = KeyParser()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def has_for_locale(self, key: str, locale: LocaleCode | None = None) -> bool:
        """Determine if a translation exists for the locale, without fallback."""
        return self.has(key, locale, fallback=False)

    def has(self, key: str, locale: LocaleCode | None = None, fallback: bool = True) -> bool:
        """Determine if a translation exists.

        A flat catalog entry for the exact key always counts. Otherwise the
        line counts as translated when it differs from the key, so a grouped
        line whose text equals its own key reads as missing.
        """
        locale = locale or self.get_locale()

        # Missing keys are not "handled" while probing: a callback rewriting
        # the key would make every key look translated.
        with self._handle_missing_keys.disabled():
            line = self.get(key, {}, locale, fallback)

        if self._flat_line(key, locale) is not None:
            return True

        return line != key

    def get(
        self,
        key: str,
        replace: Mapping[str, Any] | None = None,
        locale: LocaleCode | None = None,
        fallback: bool = True,
    ) -> str | MessageTree:
        """Get the translation for the given key.

        Args:
            key: Whole-string key (flat catalog) or ``[namespace::]group.item``
            replace: Placeholder values
            locale: Locale to resolve in (default: current locale)
            fallback: Probe the fallback locale when the locale misses

        Returns:
            Translated line, a translated group/sub-tree when the key
            addresses structure, or the key itself when nothing matched

        Raises:
            MalformedCatalogError: If a flat catalog file cannot be parsed
        """
        locale = locale or self.get_locale()

        line = self._flat_line(key, locale)

        if line is None:
            namespace, group, item = self.parse_key(key)

            locales = self._locale_array(locale) if fallback else (locale,)

            for candidate in locales:
                resolved = self._get_line(namespace, group, candidate, item, replace)
                if resolved is not None:
                    if candidate != locale:
                        logger.debug("Key '%s' resolved from fallback locale %s", key, candidate)
                    return resolved

            key = self._handle_missing_key(key, replace, locale, fallback)

        # An empty or absent line displays the key, so gaps stay visible.
        return map_leaves(line or key, partial(self.make_replacements, replace=replace))

    def choice(
        self,
        key: str,
        number: Count | Sized,
        replace: Mapping[str, Any] | None = None,
        locale: LocaleCode | None = None,
    ) -> str:
        """Get a translation according to a count.

        Args:
            key: Translation key of a pipe-delimited plural line
            number: Count, or a sized collection whose length is the count
            replace: Placeholder values; ``count`` defaults to the number
            locale: Locale to resolve in (default: current locale)

        Returns:
            Selected plural segment with placeholders substituted

        Raises:
            TypeError: If the key resolves to a group instead of a line
        """
        locale = self._locale_for_choice(key, locale)
        line = self.get(key, {}, locale)

        if not isinstance(line, str):
            msg = f"Translation '{key}' resolves to a group, not a plural line"
            raise TypeError(msg)

        if isinstance(number, Sized) and not isinstance(number, str):
            number = len(number)

        replace = dict(replace or {})
        if replace.get("count") is None:
            replace["count"] = number

        return self.make_replacements(
            self.get_selector().choose(line, number, locale),  # type: ignore[arg-type]
            replace,
        )

    def trans(
        self,
        key: str,
        replace: Mapping[str, Any] | None = None,
        locale: LocaleCode | None = None,
    ) -> str | MessageTree:
        """Alias of ``get`` with fallback enabled."""
        return self.get(key, replace, locale)

    def trans_choice(
        self,
        key: str,
        number: Count | Sized,
        replace: Mapping[str, Any] | None = None,
        locale: LocaleCode | None = None,
    ) -> str:
        """Alias of ``choice``."""
        return self.choice(key, number, replace, locale)

    def _locale_for_choice(self, key: str, locale: LocaleCode | None) -> LocaleCode:
        """Use the requested locale if it has the key, else the fallback locale."""
        locale = locale or self.get_locale()
        if self.has_for_locale(key, locale):
            return locale
        return self._fallback or locale

    def _flat_line(self, key: str, locale: LocaleCode) -> Any:
        """Return the flat catalog entry for the whole key, loading the catalog once."""
        return self._cache.get(DEFAULT_NAMESPACE, FLAT_GROUP, locale).get(key)

    def _get_line(
        self,
        namespace: Namespace,
        group: Group,
        locale: LocaleCode,
        item: str | None,
        replace: Mapping[str, Any] | None,
    ) -> str | MessageTree | None:
        """Retrieve a line (or non-empty structure) from the loaded catalogs."""
        line = get_path(self._cache.get(namespace, group, locale), item)

        if isinstance(line, str):
            return self.make_replacements(line, replace)

        if isinstance(line, (Mapping, list)) and line:
            return map_leaves(line, partial(self.make_replacements, replace=replace))

        return None

    def make_replacements(self, line: str, replace: Mapping[str, Any] | None) -> str:
        """Make the placeholder replacements on a line."""
        return make_replacements(line, replace, self._stringables)

    # ------------------------------------------------------------------
    # Missing keys
    # ------------------------------------------------------------------

    def _handle_missing_key(
        self,
        key: str,
        replace: Mapping[str, Any] | None,
        locale: LocaleCode,
        fallback: bool,
    ) -> str:
        """Give the missing-key callback a chance to rewrite the key."""
        logger.debug("Missing translation key '%s' for locale %s", key, locale)

        if not self._handle_missing_keys or self._missing_key_callback is None:
            return key

        # Lookups made by the callback itself must not re-enter it.
        with self._handle_missing_keys.disabled():
            result = self._missing_key_callback(key, dict(replace or {}), locale, fallback)

        return key if result is None else result

    def handle_missing_keys_using(self, callback: MissingKeyCallback | None) -> Self:
        """Register (or clear, with None) the missing-key callback."""
        self._missing_key_callback = callback
        return self

    # ------------------------------------------------------------------
    # Catalogs
    # ------------------------------------------------------------------

    def add_lines(
        self,
        lines: Mapping[str, Any],
        locale: LocaleCode,
        namespace: Namespace = DEFAULT_NAMESPACE,
    ) -> None:
        """Add translation lines (``{"group.item": line}``) for the locale."""
        self._cache.add_lines(lines, locale, namespace)

    def load(self, namespace: Namespace, group: Group, locale: LocaleCode) -> None:
        """Load the specified group into the cache unless already loaded."""
        self._cache.get(namespace, group, locale)

    def is_loaded(self, namespace: Namespace, group: Group, locale: LocaleCode) -> bool:
        """Determine if the given group has been loaded."""
        return self._cache.is_loaded(namespace, group, locale)

    def set_loaded(self, loaded: LoadedCatalogs) -> None:
        """Replace all loaded catalogs."""
        self._cache.set_loaded(loaded)

    def get_loaded(self) -> LoadedCatalogs:
        """Return a copy of all loaded catalogs, suitable for ``set_loaded``."""
        return self._cache.snapshot()

    def add_namespace(self, namespace: Namespace, hint: str) -> None:
        """Add a new namespace to the loader."""
        self._loader.add_namespace(namespace, hint)

    def add_path(self, path: str) -> None:
        """Add a new path to the loader."""
        self._loader.add_path(path)

    def add_json_path(self, path: str) -> None:
        """Add a new JSON path to the loader."""
        self._loader.add_json_path(path)

    def get_loader(self) -> MessageSource:
        """Get the message source implementation."""
        return self._loader

    def parse_key(self, key: str) -> ParsedKey:
        """Parse a key into namespace, group and item."""
        return self._keys.parse_key(key)

    # ------------------------------------------------------------------
    # Locales
    # ------------------------------------------------------------------

    def _locale_array(self, locale: LocaleCode | None) -> tuple[LocaleCode, ...]:
        """Get the locales to be checked."""
        return locale_chain(
            locale,
            self.get_locale(),
            self._fallback,
            determine=self._determine_locales,
        )

    def determine_locales_using(self, callback: DetermineLocales) -> None:
        """Replace the fallback chain computation with ``callback``."""
        self._determine_locales = callback

    @property
    def locale(self) -> LocaleCode:
        """Current locale of the calling context."""
        return self.get_locale()

    def get_locale(self) -> LocaleCode:
        """Get the current locale of the calling context."""
        return self._locale.get()

    def set_locale(self, locale: LocaleCode) -> None:
        """Set the locale for the calling context (thread / asyncio task).

        Raises:
            InvalidLocaleError: If locale contains a path separator
        """
        self._locale.set(locale)

    def using_locale(self, locale: LocaleCode) -> AbstractContextManager[LocaleCode]:
        """Context manager switching the calling context's locale temporarily.

        Example:
            >>> with translator.using_locale("de"):
            ...     translator.get("auth.failed")
            'Diese Kombination aus Zugangsdaten wurde nicht gefunden.'
        """
        return self._locale.using(locale)

    def get_fallback(self) -> LocaleCode | None:
        """Get the fallback locale being used."""
        return self._fallback

    def set_fallback(self, fallback: LocaleCode | None) -> None:
        """Set the fallback locale being used."""
        self._fallback = fallback

    # ------------------------------------------------------------------
    # Selector and stringables
    # ------------------------------------------------------------------

    def get_selector(self) -> MessageSelector:
        """Get the message selector instance, creating it on first use."""
        if self._selector is None:
            self._selector = MessageSelector()
        return self._selector

    def set_selector(self, selector: MessageSelector) -> None:
        """Set the message selector instance."""
        self._selector = selector

    def stringable(
        self, cls: type, handler: StringableHandler | None = None
    ) -> Any:
        """Register a renderer for replacement values of exactly type ``cls``.

        Usable directly or as a decorator:

            >>> translator.stringable(Money, lambda m: f"{m.amount} {m.currency}")
            >>> @translator.stringable(Temperature)
            ... def render(value: Temperature) -> str:
            ...     return f"{value.degrees}°"
        """
        if handler is None:

            def decorator(func: StringableHandler) -> StringableHandler:
                self._stringables.register(cls, func)
                return func

            return decorator

        self._stringables.register(cls, handler)
        return None

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Translator(locale={self.get_locale()!r}, fallback={self._fallback!r}, "
            f"loader={type(self._loader).__name__})"
        )
