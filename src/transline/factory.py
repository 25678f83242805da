"""Construction of translators and the process-wide default translator.

Applications build a Translator from a TranslatorConfig once, at startup,
and register it with ``set_translator`` so the free functions in
``transline.functions`` can reach it. ``get_translator`` builds one from
the default configuration on first use when nothing was registered.

Thread Safety:
    Registration and lazy construction are serialised by a module lock.
    The registered translator itself is safe to share (see Translator).

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from transline.config import TranslatorConfig
from transline.localization.filesystem import LocalFilesystem
from transline.localization.loading import FileMessageSource
from transline.runtime.translator import Translator

if TYPE_CHECKING:
    from transline.localization.filesystem import Filesystem
    from transline.localization.loading import MessageSource

__all__ = [
    "create_message_source",
    "create_translator",
    "get_translator",
    "reset_translator",
    "set_translator",
]

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_translator: Translator | None = None


def create_message_source(
    config: TranslatorConfig, files: Filesystem | None = None
) -> FileMessageSource:
    """Build the file message source described by ``config``.

    Args:
        config: Translator configuration
        files: Storage collaborator (defaults to LocalFilesystem)

    Returns:
        FileMessageSource with the configured paths and JSON paths
    """
    source = FileMessageSource(
        files if files is not None else LocalFilesystem(),
        config.paths,
        extension=config.extension,
    )
    for path in config.json_paths:
        source.add_json_path(path)
    return source


def create_translator(
    config: TranslatorConfig | None = None, source: MessageSource | None = None
) -> Translator:
    """Build a translator from ``config``.

    Args:
        config: Translator configuration (default: ``TranslatorConfig()``)
        source: Message source (default: built with ``create_message_source``)

    Example:
        >>> translator = create_translator(TranslatorConfig(locale="fr", paths=("lang",)))
        >>> translator.get_locale()
        'fr'
    """
    config = config if config is not None else TranslatorConfig()
    if source is None:
        source = create_message_source(config)

    translator = Translator(source, config.locale, fallback=config.fallback_locale or None)
    logger.debug(
        "Created translator for locale %s (fallback %s)", config.locale, config.fallback_locale
    )
    return translator


def set_translator(translator: Translator) -> None:
    """Register the process-wide translator used by the free functions."""
    global _translator  # noqa: PLW0603
    with _lock:
        _translator = translator
    logger.info("Registered default translator %r", translator)


def get_translator() -> Translator:
    """Return the process-wide translator, building a default one on first use."""
    global _translator  # noqa: PLW0603
    translator = _translator
    if translator is not None:
        return translator

    with _lock:
        if _translator is None:
            _translator = create_translator()
        return _translator


def reset_translator() -> None:
    """Forget the process-wide translator. Primarily for tests."""
    global _translator  # noqa: PLW0603
    with _lock:
        _translator = None
