"""Tests for concurrent first access to the catalog cache and the RWLock."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from transline.localization import ArrayMessageSource, FileMessageSource
from transline.runtime.rwlock import RWLock
from transline.runtime.translator import Translator


class TestConcurrentPopulation:
    """Test that concurrent first access loads once and never corrupts."""

    def test_same_triple_loaded_once(self) -> None:
        """Many threads racing on one triple trigger a single load."""
        calls: list[str] = []
        lock = threading.Lock()

        class SlowSource(ArrayMessageSource):
            def load(self, locale, group, namespace=None):
                with lock:
                    calls.append(f"{namespace}:{group}:{locale}")
                time.sleep(0.01)
                return super().load(locale, group, namespace)

        source = SlowSource().add_messages("en", "auth", {"failed": "Bad"})
        translator = Translator(source, "en")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: translator.get("auth.failed"), range(32)))

        assert results == ["Bad"] * 32
        assert calls.count("*:auth:en") == 1
        assert calls.count("*:*:en") == 1

    def test_many_groups_and_locales(
        self, tmp_path: Path, write_catalog, counting_files
    ) -> None:
        """Concurrent lookups across triples each read storage once."""
        locales = ("en", "fr", "de")
        groups = ("auth", "mail", "nav")
        for locale in locales:
            for group in groups:
                write_catalog(f"lang/{locale}/{group}.yaml", {"title": f"{group}-{locale}"})

        translator = Translator(FileMessageSource(counting_files, str(tmp_path / "lang")), "en")
        keys = [(f"{group}.title", locale) for group in groups for locale in locales] * 5

        with ThreadPoolExecutor(max_workers=9) as executor:
            results = list(executor.map(lambda pair: translator.get(pair[0], locale=pair[1]), keys))

        assert results == [f"{key.split('.')[0]}-{locale}" for key, locale in keys]
        assert len(counting_files.reads) == len(set(counting_files.reads)) == 9


class TestRWLock:
    """Test lock discipline."""

    def test_concurrent_readers(self) -> None:
        """Readers overlap."""
        lock = RWLock()
        inside = threading.Barrier(3, timeout=5)

        def reader() -> None:
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert not inside.broken

    def test_reentrant_read(self) -> None:
        """A thread may nest read sections."""
        lock = RWLock()
        with lock.read(), lock.read():
            pass

    def test_upgrade_rejected(self) -> None:
        """Holding a read lock while asking for write raises."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"), lock.write():
            pass

    def test_downgrade_rejected(self) -> None:
        """Holding the write lock while asking for read raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="read lock while holding write"):
            with lock.read():
                pass

    def test_write_not_reentrant(self) -> None:
        """A second write acquisition raises."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding"), lock.write():
            pass

    def test_writer_active_flag(self) -> None:
        """writer_active reflects the write lock."""
        lock = RWLock()
        assert not lock.writer_active
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_writer_excludes_readers(self) -> None:
        """A reader waits while a writer holds the lock."""
        lock = RWLock()
        events: list[str] = []
        writer_in = threading.Event()

        def writer() -> None:
            with lock.write():
                writer_in.set()
                time.sleep(0.05)
                events.append("write-done")

        def reader() -> None:
            writer_in.wait()
            with lock.read():
                events.append("read")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        assert events == ["write-done", "read"]
