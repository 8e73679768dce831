from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any

from openhours_app.core.builder import build_structured_hours
from openhours_app.core.formatter import format_osm_hours
from openhours_app.core.http import HttpClient
from openhours_app.core.models import FormattedHours, StructuredOpeningHours

_log = logging.getLogger(__name__)

DEFAULT_NOMINATIM_BASE_URL = os.environ.get(
    "OPENHOURS_NOMINATIM_BASE_URL", "https://nominatim.openstreetmap.org"
).rstrip("/")
DEFAULT_USER_AGENT = os.environ.get("OPENHOURS_USER_AGENT", "openhours_app/1.0")

_NAME_SEPARATOR_RE = re.compile(r"\s*[-|_–—]\s*")


@dataclass(frozen=True)
class EnrichmentResult:
    opening_hours_osm: str | None
    formatted: FormattedHours | None
    structured: StructuredOpeningHours | None
    error: str | None = None


def simplify_business_name(name: str) -> str | None:
    """'Die Auffüllerei - unverpackt einkaufen' -> 'Die Auffüllerei'."""
    simplified = _NAME_SEPARATOR_RE.split(name)[0].strip()
    if simplified and simplified != name.strip():
        return simplified
    return None


def enrich_opening_hours(osm: str | None) -> tuple[FormattedHours | None, StructuredOpeningHours | None]:
    if not osm or not osm.strip():
        return None, None
    return format_osm_hours(osm), build_structured_hours(osm)


class NominatimClient:
    def __init__(
        self,
        http: HttpClient,
        *,
        base_url: str = DEFAULT_NOMINATIM_BASE_URL,
        retry_delay_seconds: float = 1.0,
    ) -> None:
        self._http = http
        self._base_url = (base_url or DEFAULT_NOMINATIM_BASE_URL).rstrip("/")
        self._retry_delay_seconds = float(retry_delay_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    def search_with_extras(
        self,
        query: str,
        *,
        lat: float | None = None,
        lng: float | None = None,
    ) -> EnrichmentResult:
        query = (query or "").strip()
        if not query:
            return EnrichmentResult(None, None, None, error="Empty query")

        queries = [query]
        simplified = simplify_business_name(query)
        if simplified:
            queries.append(simplified)

        hits: list[Any] = []
        last_error: str | None = None
        for idx, q in enumerate(queries):
            if idx > 0:
                # Nominatim usage policy: at most one request per second.
                self._http.polite_delay(self._retry_delay_seconds)
            try:
                data = self._http.get_json(f"{self._base_url}/search", params=self._params(q, lat, lng))
            except Exception as e:  # noqa: BLE001
                last_error = str(e) or e.__class__.__name__
                _log.debug("Nominatim search for %r failed: %s", q, last_error)
                continue
            last_error = None
            hits = data if isinstance(data, list) else []
            if hits:
                break

        if last_error and not hits:
            _log.warning("Nominatim lookup failed for %r: %s", query, last_error)
            return EnrichmentResult(None, None, None, error=last_error)
        if not hits or not isinstance(hits[0], dict):
            _log.info("Nominatim returned no results for %r", query)
            return EnrichmentResult(None, None, None, error="No results found")

        extratags = hits[0].get("extratags")
        osm = extratags.get("opening_hours") if isinstance(extratags, dict) else None
        if not isinstance(osm, str) or not osm.strip():
            return EnrichmentResult(None, None, None)

        formatted, structured = enrich_opening_hours(osm)
        return EnrichmentResult(opening_hours_osm=osm, formatted=formatted, structured=structured)

    @staticmethod
    def _params(query: str, lat: float | None, lng: float | None) -> dict[str, str]:
        params = {
            "format": "json",
            "q": query,
            "limit": "1",
            "addressdetails": "1",
            "extratags": "1",
        }
        if lat is not None and lng is not None:
            params["lat"] = str(lat)
            params["lon"] = str(lng)
        return params
