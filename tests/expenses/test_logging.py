"""Tests for global logging bootstrap behavior."""

import logging
from typing import Any

import pytest

from expenses.logging import configure_logging, resolve_level


def test_configure_logging_calls_basic_config_with_expected_arguments(monkeypatch) -> None:  # noqa: ANN001
    """Bootstrap should delegate to `logging.basicConfig` with expected args."""
    captured: dict[str, Any] = {}

    def _fake_basic_config(**kwargs: Any) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", _fake_basic_config)

    configure_logging("debug")

    assert captured["level"] == logging.DEBUG
    assert "%(asctime)s" in captured["format"]


def test_resolve_level_accepts_names_and_numbers() -> None:
    """Level names are case-insensitive; numbers pass through."""
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level(" INFO ") == logging.INFO
    assert resolve_level(15) == 15


def test_resolve_level_rejects_unknown_names() -> None:
    """Typos in the config fail loudly."""
    with pytest.raises(ValueError, match="Unknown logging level"):
        resolve_level("chatty")
