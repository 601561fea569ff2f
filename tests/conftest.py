"""Make scripts/ importable for tests. Shared fixtures and helpers."""

import errno
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from namecheck.config import Settings  # noqa: E402
from namecheck.rules import load_rule_table  # noqa: E402


# ---------------------------------------------------------------------------
# Shared helpers (importable by test files)
# ---------------------------------------------------------------------------


def write_tree(root, files):
    """Write ``{relative_path: content}`` under root.

    A ``None`` content creates an empty directory instead of a file.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        if content is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
    return root


def reasons(violations):
    """Reason code values of a list of violations, in order."""
    return [v.reason.value for v in violations]


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop NAMECHECK_* variables from the developer's environment."""
    for name in list(os.environ):
        if name.startswith("NAMECHECK_"):
            monkeypatch.delenv(name)


@pytest.fixture()
def make_project(tmp_path):
    """Return a builder writing a fake project tree under tmp_path/project."""

    def _make(files):
        return write_tree(tmp_path / "project", files)

    return _make


@pytest.fixture()
def settings():
    return Settings()


@pytest.fixture()
def table():
    return load_rule_table()


@pytest.fixture()
def unreadable(monkeypatch):
    """Make ``os.scandir`` fail with EACCES for the given directories.

    Works regardless of the user running the tests (root ignores chmod).
    """
    real_scandir = os.scandir
    blocked = set()

    def fake_scandir(path="."):
        if os.fspath(path) in blocked:
            raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _block(*paths):
        blocked.update(os.fspath(p) for p in paths)

    return _block
