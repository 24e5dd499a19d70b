"""Shared fixtures for the winget-autoupdate test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from winget_autoupdate.config import get_settings


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep tests independent of the caller's environment and .env file."""
    for name in (
        "WINGET_AUTOUPDATE_LOG_ROOT",
        "WINGET_AUTOUPDATE_PACKAGE_MANAGER",
        "WINGET_AUTOUPDATE_UPGRADE_ARGS",
        "WINGET_AUTOUPDATE_VERSION_ARGS",
        "WINGET_AUTOUPDATE_COMMAND_TIMEOUT",
        "WINGET_AUTOUPDATE_VERSION_TIMEOUT",
        "WINGET_AUTOUPDATE_ENVIRONMENT",
        "WINGET_AUTOUPDATE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
