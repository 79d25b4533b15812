"""Shared pytest fixtures for the create-new-app test suite.

Provides reusable fixtures for:
- A ``ResolvedOptions`` factory rooted in a temporary working directory
- Settings that never touch the network or the package manager
- A fake ``questionary`` module for driving the wizard
"""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable

import pytest

from create_new_app.config import ResolvedOptions, Settings


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Directory the generator is "run from" (auto-cleanup)."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    yield cwd


# ---------------------------------------------------------------------------
# Options & settings
# ---------------------------------------------------------------------------


@pytest.fixture
def make_options(workdir: Path) -> Callable[..., ResolvedOptions]:
    """Factory for ``ResolvedOptions`` with sensible defaults.

    ``make_options(redux=True)`` builds ``myApp`` inside ``workdir``.
    """

    def _make(app_name: str = "myApp", **overrides: Any) -> ResolvedOptions:
        values: dict[str, Any] = {
            "app_name": app_name,
            "title": app_name,
            "description": app_name,
            "app_dir": workdir / app_name,
        }
        values.update(overrides)
        return ResolvedOptions(**values)

    return _make


@pytest.fixture
def offline_settings() -> Settings:
    """Settings that skip the install step."""
    return Settings(skip_install=True, registry_url="http://127.0.0.1:9", probe_timeout=0.1)


# ---------------------------------------------------------------------------
# questionary
# ---------------------------------------------------------------------------


class FakeQuestion:
    """Mimics questionary.Question -- returns a canned value from .ask()."""

    def __init__(self, value: Any) -> None:
        self._value = value

    def ask(self) -> Any:
        return self._value


def build_fake_questionary(answers: dict[str, Any]) -> SimpleNamespace:
    """Build a fake questionary module from a mapping of prompt-fragment -> answer.

    Every prompt that was asked is recorded in ``fake.asked``, in order, so
    tests can check which questions were skipped.
    """
    asked: list[str] = []

    def _find(prompt: str) -> Any:
        asked.append(prompt)
        for key, value in answers.items():
            if key.lower() in prompt.lower():
                return value
        raise KeyError(f"no answer configured for prompt: {prompt!r}")

    def _text(prompt: str, **_kw: Any) -> FakeQuestion:
        return FakeQuestion(_find(prompt))

    def _confirm(prompt: str, **_kw: Any) -> FakeQuestion:
        return FakeQuestion(_find(prompt))

    return SimpleNamespace(text=_text, confirm=_confirm, asked=asked)


@pytest.fixture
def fake_questionary(monkeypatch: pytest.MonkeyPatch) -> Callable[[dict[str, Any]], SimpleNamespace]:
    """Install a fake questionary module answering from the given mapping."""

    def _install(answers: dict[str, Any]) -> SimpleNamespace:
        fake = build_fake_questionary(answers)
        monkeypatch.setitem(sys.modules, "questionary", fake)
        return fake

    return _install
