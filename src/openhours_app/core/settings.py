from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from openhours_app.core.models import Locale
from openhours_app.core.nominatim import DEFAULT_NOMINATIM_BASE_URL, DEFAULT_USER_AGENT

DEFAULT_LOCALE: Locale = "de"


def default_settings_path() -> Path:
    return Path(user_data_dir("openhours_app", "openhours_app")) / "settings.json"


class SettingsStore:
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.RLock()
        self._data: dict[str, Any] = self._load()

    def get_locale(self) -> Locale:
        with self._lock:
            value = self._data.get("locale")
            if value == "de" or value == "en":
                return value
            return DEFAULT_LOCALE

    def set_locale(self, locale: Locale) -> None:
        if locale not in ("de", "en"):
            raise ValueError(f"Unsupported locale: {locale!r}")
        with self._lock:
            self._data["locale"] = locale
            self._save(self._data)

    def get_nominatim_user_agent(self) -> str:
        with self._lock:
            value = self._data.get("nominatim_user_agent")
            if isinstance(value, str) and value.strip():
                return value.strip()
            return DEFAULT_USER_AGENT

    def set_nominatim_user_agent(self, user_agent: str) -> None:
        user_agent = (user_agent or "").strip()
        if not user_agent:
            return
        with self._lock:
            self._data["nominatim_user_agent"] = user_agent
            self._save(self._data)

    def get_nominatim_base_url(self) -> str:
        with self._lock:
            value = self._data.get("nominatim_base_url")
            if isinstance(value, str) and value.strip():
                return value.strip().rstrip("/")
            return DEFAULT_NOMINATIM_BASE_URL

    def set_nominatim_base_url(self, base_url: str) -> None:
        base_url = (base_url or "").strip().rstrip("/")
        if not base_url:
            return
        with self._lock:
            self._data["nominatim_base_url"] = base_url
            self._save(self._data)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError:
            return {}
        try:
            obj = json.loads(text)
        except json.JSONDecodeError:
            return {}
        return obj if isinstance(obj, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self._path)
