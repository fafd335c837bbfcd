"""Tests for l10n.core.config.Settings and the environment bootstrap."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

import l10n.bundle.store as store_mod
from l10n import t
from l10n.bundle.store import get_store
from l10n.core.config import Settings, get_settings

from conftest import WRAPPED_BUNDLE


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
class TestDefaults:
    """Settings defaults."""

    def test_bundle_location_default_empty(self) -> None:
        """No bootstrap bundle by default."""
        assert Settings().BUNDLE_LOCATION == ""

    def test_fetch_timeout_default(self) -> None:
        """Fetch timeout defaults to 10 seconds."""
        assert Settings().FETCH_TIMEOUT_SECONDS == 10.0

    def test_log_level_default(self) -> None:
        """Log level defaults to INFO."""
        assert Settings().LOG_LEVEL == "INFO"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
class TestValidation:
    """Settings validation."""

    @pytest.mark.parametrize("value", [0, -1.5])
    def test_timeout_must_be_positive(self, value: float) -> None:
        """Zero or negative timeouts are rejected."""
        with pytest.raises(ValidationError, match="positive"):
            Settings(FETCH_TIMEOUT_SECONDS=value)

    def test_log_level_normalized(self) -> None:
        """Log level is upper-cased."""
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        """Unknown level names are rejected."""
        with pytest.raises(ValidationError, match="Unknown log level"):
            Settings(LOG_LEVEL="LOUD")

    def test_location_stripped(self) -> None:
        """Whitespace around the location is dropped."""
        assert Settings(BUNDLE_LOCATION="  /tmp/b.json ").BUNDLE_LOCATION == "/tmp/b.json"

    def test_reads_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """L10N_-prefixed variables are read."""
        monkeypatch.setenv("L10N_FETCH_TIMEOUT_SECONDS", "2.5")
        assert Settings().FETCH_TIMEOUT_SECONDS == 2.5

    def test_get_settings_cached(self) -> None:
        """get_settings returns one instance."""
        assert get_settings() is get_settings()


# ---------------------------------------------------------------------------
# Default store bootstrap
# ---------------------------------------------------------------------------
class TestBootstrap:
    """Default store created from L10N_BUNDLE_LOCATION."""

    def test_empty_without_location(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """No location: the default store starts EMPTY."""
        monkeypatch.setattr(store_mod, "_default_store", None)
        assert get_store().loaded is False
        assert get_store() is get_store()

    def test_loads_path_from_env(self, monkeypatch: pytest.MonkeyPatch, write_bundle) -> None:
        """A path location is loaded on first use."""
        monkeypatch.setenv("L10N_BUNDLE_LOCATION", str(write_bundle(WRAPPED_BUNDLE)))
        monkeypatch.setattr(store_mod, "_default_store", None)
        assert t("message") == "translated message"

    def test_loads_file_uri_from_env(self, monkeypatch: pytest.MonkeyPatch, write_bundle) -> None:
        """A file: URI location is loaded on first use."""
        monkeypatch.setenv("L10N_BUNDLE_LOCATION", write_bundle(WRAPPED_BUNDLE).as_uri())
        monkeypatch.setattr(store_mod, "_default_store", None)
        assert t("message") == "translated message"

    def test_missing_env_bundle_falls_back(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A missing bundle is logged once and t() falls back."""
        monkeypatch.setenv("L10N_BUNDLE_LOCATION", str(tmp_path / "missing.json"))
        monkeypatch.setattr(store_mod, "_default_store", None)
        with caplog.at_level(logging.WARNING, logger="l10n"):
            assert t("message") == "message"
            assert t("message", "x") == "message"
        assert get_store().loaded is False
        failures = [r for r in caplog.records if getattr(r, "event", None) == "bundle_load_failed"]
        assert len(failures) == 1
        assert failures[0].source == "fs_path"

    def test_malformed_env_bundle_falls_back(self, monkeypatch: pytest.MonkeyPatch, write_bundle) -> None:
        """A malformed bundle leaves the store EMPTY."""
        monkeypatch.setenv("L10N_BUNDLE_LOCATION", str(write_bundle("{ broken")))
        monkeypatch.setattr(store_mod, "_default_store", None)
        assert t("message") == "message"
        assert get_store().loaded is False
