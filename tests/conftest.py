"""Shared test fixtures for colltree.

Provides reusable fixtures for loading collection documents, creating isolated
config environments, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from colltree.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw collection fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


def _load_fixture(name: str) -> dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def auth_collection_raw() -> dict[str, Any]:
    """The Auth/Login/Ping collection with collection-level scripts and variables."""
    return _load_fixture("auth_collection.json")


@pytest.fixture
def nested_collection_raw() -> dict[str, Any]:
    """An enveloped collection with folder scripts and an empty folder."""
    return _load_fixture("nested_collection.json")


@pytest.fixture
def collection_list_raw() -> dict[str, Any]:
    """A ``{"collections": [...]}`` listing."""
    return _load_fixture("collection_list.json")


@pytest.fixture
def fixture_path() -> Any:
    """Return a function mapping a fixture file name to its absolute path string."""
    return lambda name: str(FIXTURES_DIR / name)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, clears all COLLTREE_*
    environment variables, and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("colltree.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["COLLTREE_MAX_DEPTH", "COLLTREE_OUTPUT_FORMAT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
