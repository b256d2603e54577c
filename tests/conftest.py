"""Shared fixtures for x-ui tests."""

import pytest

XUI_ENV_VARS = (
    "XUI_DEBUG",
    "XUI_LOG_LEVEL",
    "XUI_BIN_FOLDER",
    "XUI_DB_FOLDER",
    "XUI_LOG_FOLDER",
    "XUI_DB_CONNECTION",
    "XUI_DB_HOST",
    "XUI_DB_PORT",
    "XUI_DB_DATABASE",
    "XUI_DB_USERNAME",
    "XUI_DB_PASSWORD",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without any XUI_* variables set."""
    for name in XUI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mysql_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """A complete MySQL environment without a port."""
    monkeypatch.setenv("XUI_DB_CONNECTION", "mysql")
    monkeypatch.setenv("XUI_DB_HOST", "h")
    monkeypatch.setenv("XUI_DB_DATABASE", "d")
    monkeypatch.setenv("XUI_DB_USERNAME", "u")
    monkeypatch.setenv("XUI_DB_PASSWORD", "p")
