"""Pytest fixtures for VendFA tests."""

from __future__ import annotations

import pytest

from vendfa.app.clock import MockClock
from vendfa.app.settings import DisplayConfig, Settings
from vendfa.domain.engines import VendingMachineEngine

ENV_VARS = (
    "VENDFA_ENV",
    "VENDFA_LOG_LEVEL",
    "VENDFA_JSON_LOGS",
    "VENDFA_LOG_FILE",
    "VENDFA_CURRENCY",
)


@pytest.fixture
def mock_clock():
    """Provide a mock clock for deterministic tests."""
    return MockClock()


@pytest.fixture
def engine(mock_clock):
    """Provide a fresh engine stamped by the mock clock."""
    return VendingMachineEngine(clock=mock_clock)


@pytest.fixture
def test_settings():
    """Provide test settings."""
    return Settings(
        log_level="DEBUG",
        display=DisplayConfig(
            currency_symbol="₹",
            newest_first=True,
            time_format="%H:%M:%S",
        ),
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove VENDFA_* variables, including any a .env file sets mid-test."""
    for name in ENV_VARS:
        # setenv first so the delete is recorded and undone on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield monkeypatch
