"""Context-local state for the translator.

The "current locale" must not be an attribute shared by every caller of a
translator: two requests served concurrently by one process would see each
other's locale. Both the current locale and the missing-key re-entrancy
flag therefore live in ``contextvars.ContextVar`` instances, which are
isolated per thread and per asyncio task.

Each translator owns its own variables, so two translators in one process
keep independent current locales.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

from transline.locale_utils import validate_locale

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["LocaleContext", "ScopedFlag"]

_ids = itertools.count()


class LocaleContext:
    """Context-local current locale with a construction-time default.

    Example:
        >>> context = LocaleContext("en")
        >>> context.get()
        'en'
        >>> with context.using("fr"):
        ...     context.get()
        'fr'
        >>> context.get()
        'en'
    """

    __slots__ = ("_default", "_var")

    def __init__(self, default: str) -> None:
        """Initialize with the locale returned when none was set in this context.

        Raises:
            InvalidLocaleError: If default contains a path separator
        """
        self._default = validate_locale(default)
        self._var: ContextVar[str | None] = ContextVar(
            f"transline_locale_{next(_ids)}", default=None
        )

    @property
    def default(self) -> str:
        """Locale used when the current context never set one."""
        return self._default

    def get(self) -> str:
        """Return the current context's locale."""
        locale = self._var.get()
        return self._default if locale is None else locale

    def set(self, locale: str) -> Token[str | None]:
        """Set the locale for the current context.

        Returns:
            Token that ``reset`` accepts to restore the previous value

        Raises:
            InvalidLocaleError: If locale contains a path separator
        """
        return self._var.set(validate_locale(locale))

    def reset(self, token: Token[str | None]) -> None:
        """Restore the value that was current before ``set`` returned ``token``."""
        self._var.reset(token)

    @contextmanager
    def using(self, locale: str) -> Generator[str]:
        """Temporarily switch the current context's locale.

        Raises:
            InvalidLocaleError: If locale contains a path separator
        """
        token = self.set(locale)
        try:
            yield locale
        finally:
            self.reset(token)


class ScopedFlag:
    """Context-local boolean that can be switched off for a block.

    Used as the translator's missing-key guard: while the missing-key
    callback runs (or while ``has`` checks), the flag is off in that
    context only, and it is restored even if the block raises.
    """

    __slots__ = ("_var",)

    def __init__(self, name: str, *, default: bool = True) -> None:
        """Initialize the flag; ``name`` is suffixed to stay unique per instance."""
        self._var: ContextVar[bool] = ContextVar(f"{name}_{next(_ids)}", default=default)

    def __bool__(self) -> bool:
        return self._var.get()

    @contextmanager
    def disabled(self) -> Generator[None]:
        """Turn the flag off for the duration of the block."""
        token = self._var.set(False)
        try:
            yield
        finally:
            self._var.reset(token)
