"""Pytest configuration for the transline test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Shared fixtures build catalog directory layouts under ``tmp_path`` and
provide a call-counting storage collaborator.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import yaml
from hypothesis import Phase, Verbosity, settings

from transline.factory import reset_translator
from transline.localization import LocalFilesystem

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# STORAGE HELPERS
# =============================================================================


class CountingFilesystem(LocalFilesystem):
    """LocalFilesystem recording every read, for cache idempotence checks."""

    __slots__ = ("reads",)

    def __init__(self) -> None:
        self.reads: list[str] = []

    def get(self, path: str) -> str:
        self.reads.append(path)
        return super().get(path)

    def get_require(self, path: str) -> Any:
        self.reads.append(path)
        return super().get_require(path)


type WriteCatalog = Callable[[str, Any], Path]


@pytest.fixture
def write_catalog(tmp_path: Path) -> WriteCatalog:
    """Write a catalog file below ``tmp_path``.

    Paths ending in ``.json`` are dumped as JSON (strings are written
    verbatim, to produce malformed files); everything else as YAML.
    """

    def write(relative: str, content: Any) -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            target.write_text(content, encoding="utf-8")
        elif target.suffix == ".json":
            target.write_text(json.dumps(content), encoding="utf-8")
        else:
            target.write_text(yaml.safe_dump(content, allow_unicode=True), encoding="utf-8")
        return target

    return write


@pytest.fixture
def counting_files() -> CountingFilesystem:
    """Fresh call-counting storage collaborator."""
    return CountingFilesystem()


@pytest.fixture(autouse=True)
def _isolated_default_translator() -> Iterator[None]:
    """Keep the process-wide translator registry clean between tests."""
    reset_translator()
    yield
    reset_translator()
