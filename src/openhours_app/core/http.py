from __future__ import annotations

import time
import threading
from typing import Any

import requests


class HttpClient:
    def __init__(self, *, user_agent: str, accept_language: str = "de,en;q=0.8") -> None:
        self._session = requests.Session()
        self._lock = threading.Lock()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept-Language": accept_language,
            }
        )

    def get_json(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        timeout_seconds: float = 15.0,
    ) -> Any:
        with self._lock:
            resp = self._session.get(url, params=params, timeout=timeout_seconds)
        resp.raise_for_status()
        return resp.json()

    def close(self) -> None:
        self._session.close()

    @staticmethod
    def polite_delay(seconds: float) -> None:
        if seconds <= 0:
            return
        time.sleep(seconds)
