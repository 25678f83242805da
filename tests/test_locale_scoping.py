"""Tests for context-local locale state.

The current locale lives in a ContextVar: threads and asyncio tasks
sharing one translator must never observe each other's locale.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from transline.diagnostics import InvalidLocaleError
from transline.localization import ArrayMessageSource
from transline.runtime.locale_context import LocaleContext, ScopedFlag
from transline.runtime.translator import Translator


@pytest.fixture
def translator() -> Translator:
    source = (
        ArrayMessageSource()
        .add_messages("en", "greeting", {"hello": "Hello"})
        .add_messages("fr", "greeting", {"hello": "Bonjour"})
        .add_messages("de", "greeting", {"hello": "Hallo"})
    )
    return Translator(source, "en", fallback="en")


class TestLocaleContext:
    """Test the ContextVar-backed locale holder."""

    def test_default_until_set(self) -> None:
        """get returns the default until set."""
        context = LocaleContext("en")
        assert context.get() == "en"
        assert context.default == "en"

    def test_set_and_reset(self) -> None:
        """A token restores the previous value."""
        context = LocaleContext("en")
        token = context.set("fr")
        assert context.get() == "fr"
        context.reset(token)
        assert context.get() == "en"

    def test_using_restores_on_error(self) -> None:
        """The context manager resets even when the block raises."""
        context = LocaleContext("en")
        with pytest.raises(KeyError), context.using("fr"):
            raise KeyError("x")
        assert context.get() == "en"

    def test_validation(self) -> None:
        """Defaults and new values are validated."""
        with pytest.raises(InvalidLocaleError):
            LocaleContext("../en")
        with pytest.raises(InvalidLocaleError):
            LocaleContext("en").set("fr\\CA")

    def test_instances_independent(self) -> None:
        """Two contexts do not share state."""
        first, second = LocaleContext("en"), LocaleContext("en")
        first.set("fr")
        assert second.get() == "en"


class TestScopedFlag:
    """Test the boolean guard."""

    def test_disabled_block(self) -> None:
        """The flag is off inside the block and on again after."""
        flag = ScopedFlag("guard")
        assert flag
        with flag.disabled():
            assert not flag
        assert flag

    def test_restored_on_error(self) -> None:
        """Exceptions do not leave the flag off."""
        flag = ScopedFlag("guard")
        with pytest.raises(ValueError, match="x"), flag.disabled():
            raise ValueError("x")
        assert flag


class TestThreadIsolation:
    """Test locale isolation across threads."""

    def test_threads_do_not_observe_each_other(self, translator: Translator) -> None:
        """Each thread sees only the locale it set."""
        barrier = threading.Barrier(3)

        def work(locale: str) -> tuple[str, str]:
            translator.set_locale(locale)
            barrier.wait()
            return translator.get_locale(), translator.get("greeting.hello")

        with ThreadPoolExecutor(max_workers=3) as executor:
            results = list(executor.map(work, ["en", "fr", "de"]))

        assert results == [("en", "Hello"), ("fr", "Bonjour"), ("de", "Hallo")]

    def test_new_thread_sees_default(self, translator: Translator) -> None:
        """A locale set in one thread does not leak into a fresh thread."""
        translator.set_locale("fr")
        seen: list[str] = []

        thread = threading.Thread(target=lambda: seen.append(translator.get_locale()))
        thread.start()
        thread.join()

        assert seen == ["en"]
        assert translator.get_locale() == "fr"


class TestTaskIsolation:
    """Test locale isolation across asyncio tasks."""

    def test_tasks_do_not_observe_each_other(self, translator: Translator) -> None:
        """Concurrent tasks keep their own locale across awaits."""

        async def work(locale: str) -> str:
            translator.set_locale(locale)
            await asyncio.sleep(0)
            return translator.get("greeting.hello")

        async def main() -> list[str]:
            return await asyncio.gather(work("fr"), work("de"), work("en"))

        assert asyncio.run(main()) == ["Bonjour", "Hallo", "Hello"]
