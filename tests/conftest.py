"""Shared fixtures."""

from __future__ import annotations

import os

import pytest

from buildfs.infrastructure.config import FsSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep BUILDFS_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("BUILDFS_"):
            monkeypatch.delenv(key)


@pytest.fixture()
def settings() -> FsSettings:
    return FsSettings()
