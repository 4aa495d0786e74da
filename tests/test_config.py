"""Tests for loading and overriding the publishing configuration."""
from __future__ import annotations

import pytest

from managed_bookmarks.config import DEFAULT_PATH_SEPARATOR, PolicyConfig


def test_empty_separator_is_rejected() -> None:
    with pytest.raises(ValueError, match="path_separator"):
        PolicyConfig(path_separator="")


def test_empty_separator_override_is_rejected() -> None:
    with pytest.raises(ValueError, match="path_separator"):
        PolicyConfig().with_overrides(path_separator="")


def test_blank_env_separator_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MANAGED_BOOKMARKS_PATH_SEPARATOR", "")
    config = PolicyConfig.from_env()
    if config.path_separator != DEFAULT_PATH_SEPARATOR:
        msg = f"Expected default separator, got {config.path_separator!r}"
        raise AssertionError(msg)


def test_env_separator_is_used(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MANAGED_BOOKMARKS_PATH_SEPARATOR", "/")
    if PolicyConfig.from_env().path_separator != "/":
        raise AssertionError("Separator from the environment should be used")


def test_none_overrides_are_ignored() -> None:
    config = PolicyConfig(org_unit_id="orgunits/a").with_overrides(
        org_unit_id=None, toplevel_name="Intranet",
    )
    if config.org_unit_id != "orgunits/a" or config.toplevel_name != "Intranet":
        msg = f"Unexpected overrides result: {config}"
        raise AssertionError(msg)
