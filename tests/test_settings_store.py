"""Tests for the settings store helpers."""

from __future__ import annotations

from types import SimpleNamespace

from face_insight.config import AppConfig
from face_insight.settings_store import SettingsStore, default_settings_path


def _fake_os(name: str, **env: str) -> SimpleNamespace:
    def getenv(key: str, default=None):
        return env.get(key, default)

    return SimpleNamespace(name=name, getenv=getenv)


def test_default_settings_path_respects_xdg(monkeypatch, tmp_path):
    config_root = tmp_path / "xdg"
    fake_os = _fake_os("posix", XDG_CONFIG_HOME=str(config_root))
    monkeypatch.setattr("face_insight.settings_store.os", fake_os)

    assert default_settings_path() == config_root / "face_insight" / "settings.yaml"


def test_default_settings_path_windows(monkeypatch, tmp_path):
    appdata = tmp_path / "AppData" / "Roaming"
    fake_os = _fake_os("nt", APPDATA=str(appdata))
    monkeypatch.setattr("face_insight.settings_store.os", fake_os)

    assert default_settings_path() == appdata / "face_insight" / "settings.yaml"


def test_default_settings_path_env_override(monkeypatch, tmp_path):
    target = tmp_path / "custom.json"
    fake_os = _fake_os("posix", FACE_INSIGHT_SETTINGS=str(target))
    monkeypatch.setattr("face_insight.settings_store.os", fake_os)

    assert default_settings_path() == target


def test_settings_store_round_trip(tmp_path):
    target_path = tmp_path / "settings.yaml"
    store = SettingsStore(path=target_path)
    original = AppConfig(imgur_client_id="abc", azure_api_key="secret", jpeg_quality=70)

    store.save(original)
    loaded = store.load()

    assert loaded.imgur_client_id == "abc"
    assert loaded.azure_api_key == "secret"
    assert loaded.jpeg_quality == 70
    assert target_path.exists()


def test_settings_store_loads_defaults_when_missing(tmp_path):
    store = SettingsStore(path=tmp_path / "missing.yaml")

    assert store.load() == AppConfig()
