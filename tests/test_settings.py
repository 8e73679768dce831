from pathlib import Path

import pytest

from openhours_app.core.nominatim import DEFAULT_NOMINATIM_BASE_URL, DEFAULT_USER_AGENT
from openhours_app.core.settings import SettingsStore


def test_settings_defaults(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    assert store.get_locale() == "de"
    assert store.get_nominatim_user_agent() == DEFAULT_USER_AGENT
    assert store.get_nominatim_base_url() == DEFAULT_NOMINATIM_BASE_URL


def test_settings_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    store = SettingsStore(path)
    store.set_locale("en")
    store.set_nominatim_user_agent("  ZeroWasteFrankfurt/1.0 ")
    store.set_nominatim_base_url("https://nominatim.example/")
    store.set_nominatim_user_agent("")

    store2 = SettingsStore(path)
    assert store2.get_locale() == "en"
    assert store2.get_nominatim_user_agent() == "ZeroWasteFrankfurt/1.0"
    assert store2.get_nominatim_base_url() == "https://nominatim.example"


def test_settings_rejects_unknown_locale(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")
    with pytest.raises(ValueError):
        store.set_locale("fr")  # type: ignore[arg-type]


def test_settings_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert SettingsStore(path).get_locale() == "de"

    path.write_text('{"locale": "fr"}', encoding="utf-8")
    assert SettingsStore(path).get_locale() == "de"
