"""Shared test fixtures for componentry.

Provides a copy of the fixture application tree, helpers for building
component trees on the fly, isolation of environment settings, and
cleanup of global output and initializer-module state between tests.
"""

from __future__ import annotations

import shutil
import sys
import textwrap
from pathlib import Path

import pytest

from componentry.host import Application
from componentry.initializers import unload_initializers
from componentry.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_global_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear env overrides before, and output/initializer state after, every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time, and initializer modules stay registered in
    ``sys.modules`` until unloaded.
    """
    monkeypatch.setattr(sys, "dont_write_bytecode", True)
    for var in ("COMPONENTRY_BASE_DIR", "COMPONENTRY_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    yield
    reset_output()
    unload_initializers()


# ---------------------------------------------------------------------------
# Component trees
# ---------------------------------------------------------------------------


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """A private copy of ``tests/fixtures/app``.

    Contains ``Clients`` (init and ready hooks, routes, helpers, migrations,
    legacy directory), ``Clients::Billing`` (init and ready hooks, routes)
    and ``Reports`` (no initializer).
    """
    root = tmp_path / "app"
    shutil.copytree(FIXTURES_DIR / "app", root)
    return root


@pytest.fixture
def components_dir(app_root: Path) -> Path:
    return app_root / "components"


@pytest.fixture
def application(app_root: Path) -> Application:
    """A production-mode reference host rooted at :func:`app_root`."""
    return Application(app_root)


def _recording_initializer(name: str) -> str:
    """Source of an initializer whose hooks record *name* on ``app.config.x``."""
    return textwrap.dedent(
        f"""
        class Initialize:
            @staticmethod
            def init(app):
                app.config.x.setdefault("init_calls", []).append({name!r})

            @staticmethod
            def ready(app):
                app.config.x.setdefault("ready_calls", []).append({name!r})
        """
    )


@pytest.fixture
def make_component():
    """Factory creating ``base/relative`` with an optional ``initialize.py``.

    ``record="Name"`` writes an initializer whose hooks append ``Name`` to
    ``app.config.x["init_calls"]`` / ``["ready_calls"]``; ``source`` writes
    the given initializer text verbatim (dedented).
    """

    def _make(
        base: Path, relative: str, record: str | None = None, source: str | None = None
    ) -> Path:
        path = base / relative
        path.mkdir(parents=True, exist_ok=True)
        if record is not None:
            source = _recording_initializer(record)
        if source is not None:
            (path / "initialize.py").write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _make


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
