"""Translator configuration.

A single frozen dataclass carrying the locale settings and source paths a
translator is built from. ``TranslatorConfig.from_mapping`` reads the
application-style settings keys (``app.locale``, ``translation.paths``,
...) from a flat or nested mapping, such as a parsed settings file.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from os import PathLike, fspath
from typing import Any, Self

from transline.constants import (
    DEFAULT_EXTENSION,
    DEFAULT_FALLBACK_LOCALE,
    DEFAULT_LOCALE,
)
from transline.core.trees import get_path
from transline.locale_utils import validate_locale

__all__ = ["TranslatorConfig"]

_SETTINGS_KEYS = {
    "locale": "app.locale",
    "fallback_locale": "app.fallback_locale",
    "paths": "translation.paths",
    "json_paths": "translation.json_paths",
    "extension": "translation.extension",
}


def _as_paths(value: str | PathLike[str] | Iterable[str | PathLike[str]]) -> tuple[str, ...]:
    if isinstance(value, (str, PathLike)):
        return (fspath(value),)
    return tuple(fspath(path) for path in value)


@dataclass(frozen=True, slots=True)
class TranslatorConfig:
    """Immutable configuration for building a Translator.

    Attributes:
        locale: Default locale (default: "en")
        fallback_locale: Locale tried after the requested one (default: "en");
            None or "" disables fallback
        paths: Directories holding ``{locale}/{group}.yaml`` files and
            ``{locale}.json`` flat catalogs, in merge order
        json_paths: Extra directories holding only flat catalogs, consulted
            before ``paths``
        extension: Grouped file extension, including the dot (default: ".yaml")

    Example:
        >>> config = TranslatorConfig(locale="fr", paths=("lang",))
        >>> config.paths
        ('lang',)
        >>> TranslatorConfig.from_mapping({"app.locale": "de"}).locale
        'de'
    """

    locale: str = DEFAULT_LOCALE
    fallback_locale: str | None = DEFAULT_FALLBACK_LOCALE
    paths: tuple[str, ...] = ()
    json_paths: tuple[str, ...] = ()
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self) -> None:
        """Validate and normalise configuration values at construction time.

        Raises:
            InvalidLocaleError: If a locale contains a path separator
            ValueError: If locale is empty or extension lacks a leading dot
        """
        if not self.locale:
            msg = "locale must not be empty"
            raise ValueError(msg)
        validate_locale(self.locale)
        if self.fallback_locale:
            validate_locale(self.fallback_locale)
        if not self.extension.startswith("."):
            msg = f"extension must start with '.', got {self.extension!r}"
            raise ValueError(msg)

        # Frozen: normalise through object.__setattr__.
        object.__setattr__(self, "paths", _as_paths(self.paths))
        object.__setattr__(self, "json_paths", _as_paths(self.json_paths))

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> Self:
        """Build a configuration from application settings.

        Keys may be dotted (``{"app.locale": "fr"}``) or nested
        (``{"app": {"locale": "fr"}}``). Absent keys keep their defaults.

        Recognised keys: ``app.locale``, ``app.fallback_locale``,
        ``translation.paths``, ``translation.json_paths``,
        ``translation.extension``.
        """
        values: dict[str, Any] = {}
        for field, key in _SETTINGS_KEYS.items():
            value = get_path(settings, key)
            if value is not None:
                values[field] = value
        return cls(**values)
