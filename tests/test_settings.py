"""Tests for settings defaults, domains, and JSON persistence."""

from __future__ import annotations

import json

import pytest

from hockeytimer import settings as settings_mod
from hockeytimer.settings import (
    Settings, load_settings, save_settings,
    SOUND_NAMES, BACKGROUND_COLOR_KEYS,
)
from hockeytimer.timer.engine import SessionConfig


# ═══════════════════════════════════════════════════════════════════════
#  DEFAULTS
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_total_time(self):
        assert Settings().total_time == 900

    def test_interval(self):
        assert Settings().interval == 60

    def test_volume(self):
        assert Settings().beep_volume == 1.0

    def test_sound(self):
        assert Settings().selected_sound == "hockey whistle"

    def test_background(self):
        assert Settings().background_color_key == "white"

    def test_enumerations(self):
        assert SOUND_NAMES == ("hockey whistle", "whistle", "bell", "horn")
        assert len(BACKGROUND_COLOR_KEYS) == 9
        assert "white" in BACKGROUND_COLOR_KEYS

    def test_session_config(self):
        s = Settings(total_time=1200, interval=90)
        assert s.session_config() == SessionConfig(1200, 90)
        assert s.session_config().total_shifts == 13


# ═══════════════════════════════════════════════════════════════════════
#  DOMAINS
# ═══════════════════════════════════════════════════════════════════════


class TestNormalize:
    @pytest.mark.parametrize("given,expected", [
        (10, 300), (300, 300), (940, 960), (3600, 3600), (99999, 3600),
    ])
    def test_total_time(self, given, expected):
        assert Settings(total_time=given).normalize().total_time == expected

    @pytest.mark.parametrize("given,expected", [
        (0, 30), (30, 30), (50, 60), (200, 210), (1000, 300),
    ])
    def test_interval(self, given, expected):
        assert Settings(interval=given).normalize().interval == expected

    @pytest.mark.parametrize("given,expected", [
        (-1.0, 0.0), (0.0, 0.0), (0.4, 0.4), (3, 1.0),
    ])
    def test_volume(self, given, expected):
        assert Settings(beep_volume=given).normalize().beep_volume == expected

    def test_unknown_sound(self):
        assert Settings(selected_sound="kazoo").normalize().selected_sound == "hockey whistle"

    def test_unknown_colour(self):
        s = Settings(background_color_key="plaid").normalize()
        assert s.background_color_key == "white"


# ═══════════════════════════════════════════════════════════════════════
#  PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsPersistence:
    def test_round_trip(self):
        original = Settings(
            total_time=1800, interval=90, beep_volume=0.5,
            selected_sound="horn", background_color_key="navy",
        )
        save_settings(original)
        assert load_settings() == original

    def test_file_uses_persisted_key_names(self):
        save_settings(Settings())
        data = json.loads(settings_mod.SETTINGS_PATH.read_text(encoding="utf-8"))
        assert data == {
            "totalTime": 900,
            "interval": 60,
            "beepVolume": 1.0,
            "selectedSound": "hockey whistle",
            "backgroundColorKey": "white",
        }

    def test_missing_file_returns_defaults(self):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self, caplog):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("NOT VALID JSON", encoding="utf-8")
        assert load_settings() == Settings()
        assert "using defaults" in caplog.text

    def test_non_object_returns_defaults(self):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_bad_value_type_returns_defaults(self):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"totalTime": "lots"}), encoding="utf-8")
        assert load_settings() == Settings()

    @pytest.mark.parametrize("raw", [
        '{"totalTime": 1e400}',
        '{"interval": Infinity}',
        '{"totalTime": -Infinity}',
    ])
    def test_non_finite_number_returns_defaults(self, raw, caplog):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw, encoding="utf-8")
        assert load_settings() == Settings()
        assert "using defaults" in caplog.text

    def test_unwritable_location_is_logged(self, tmp_path, monkeypatch, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        monkeypatch.setattr(settings_mod, "APP_SUPPORT_DIR", blocker)
        monkeypatch.setattr(settings_mod, "SETTINGS_PATH", blocker / "settings.json")
        assert save_settings(Settings(interval=120)) is False
        assert "Could not write" in caplog.text

    def test_save_reports_success(self):
        assert save_settings(Settings()) is True

    def test_extra_keys_ignored(self):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"interval": 120, "unknown_future_key": True}),
            encoding="utf-8",
        )
        s = load_settings()
        assert s.interval == 120
        assert not hasattr(s, "unknown_future_key")

    def test_out_of_range_values_clamped_on_load(self):
        path = settings_mod.SETTINGS_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps({"totalTime": 10, "interval": 5000, "beepVolume": 7}),
            encoding="utf-8",
        )
        s = load_settings()
        assert (s.total_time, s.interval, s.beep_volume) == (300, 300, 1.0)
