"""Shared fixtures: an in-memory backend and an isolated environment."""

from __future__ import annotations

from pathlib import Path

import pytest
from support import FakeBackend


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DIFI_CONFIG", str(tmp_path / "no-config.yml"))
    monkeypatch.delenv("DIFI_VCS", raising=False)
    monkeypatch.delenv("DIFI_GIT_EXECUTABLE", raising=False)
    monkeypatch.delenv("DIFI_HG_EXECUTABLE", raising=False)
