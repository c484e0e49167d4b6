"""NASA POWER client for monthly solar irradiance (HSP) at a site."""
import logging
import time
from typing import Any, Dict, List, Optional

import requests

from .geocoding_cache import GeocodingCache
from .models import GeoCoordinate

logger = logging.getLogger(__name__)

NASA_POWER_URL = "https://power.larc.nasa.gov/api/temporal/monthly/point"
PARAMETER = "ALLSKY_SFC_SW_DWN"


class IrradianceServiceError(RuntimeError):
    """Raised when NASA POWER cannot be reached or returns an unusable payload."""


class NasaPowerClient:
    """Fetch monthly average all-sky irradiance (kWh/m2/day, i.e. HSP) for a point.

    Values for each calendar month are averaged over ``start_year..end_year``;
    non-positive values (NASA fill value -999) are ignored.
    """

    def __init__(
        self,
        base_url: str = NASA_POWER_URL,
        start_year: int = 2020,
        end_year: int = 2023,
        session: Optional[requests.Session] = None,
        cache: Optional[GeocodingCache] = None,
        attempts: int = 3,
        backoff_seconds: float = 0.5,
        timeout: float = 30,
    ):
        self.base_url = base_url
        self.start_year = start_year
        self.end_year = end_year
        self.session = session or requests.Session()
        self.cache = cache
        self.attempts = attempts
        self.backoff_seconds = backoff_seconds
        self.timeout = timeout

    def _build_params(self, latitude: float, longitude: float) -> Dict[str, str]:
        return {
            "parameters": PARAMETER,
            "community": "RE",
            "longitude": str(longitude),
            "latitude": str(latitude),
            "start": str(self.start_year),
            "end": str(self.end_year),
            "format": "JSON",
        }

    def _request(self, params: Dict[str, str]) -> Dict[str, Any]:
        for attempt in range(1, self.attempts + 1):
            try:
                logger.debug("NASA POWER request %s params=%s", self.base_url, params)
                resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
                resp.raise_for_status()
                return resp.json()
            except (requests.RequestException, ValueError) as exc:
                if attempt == self.attempts:
                    raise IrradianceServiceError(f"NASA POWER request failed: {exc}") from exc
                logger.warning("NASA POWER attempt %d failed: %s", attempt, exc)
                time.sleep(self.backoff_seconds * attempt)
        raise IrradianceServiceError("NASA POWER request was not attempted")

    @staticmethod
    def parse_monthly_averages(payload: Dict[str, Any]) -> List[float]:
        try:
            series = payload["properties"]["parameter"][PARAMETER]
        except (KeyError, TypeError) as exc:
            raise IrradianceServiceError("NASA POWER response missing irradiance data") from exc
        if not isinstance(series, dict):
            raise IrradianceServiceError("NASA POWER irradiance data is not a mapping")

        monthly: Dict[str, List[float]] = {f"{m:02d}": [] for m in range(1, 13)}
        for key, raw in series.items():
            if len(key) != 6 or key[4:] not in monthly or raw is None:
                continue
            try:
                value = float(raw)
            except (TypeError, ValueError) as exc:
                raise IrradianceServiceError(f"NASA POWER value for {key} is not numeric: {raw!r}") from exc
            if value > 0:
                monthly[key[4:]].append(value)

        averages = []
        for values in monthly.values():
            averages.append(round(sum(values) / len(values), 2) if values else 0.0)
        return averages

    def fetch_monthly_hsp(self, latitude: float, longitude: float) -> List[float]:
        coord = GeoCoordinate(longitude=longitude, latitude=latitude)
        key = None
        if self.cache is not None:
            key = "nasa-power|" + GeocodingCache.coordinate_key(coord.latitude, coord.longitude)
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("NASA POWER cache hit for %s", key)
                return list(cached)

        payload = self._request(self._build_params(coord.latitude, coord.longitude))
        hsp = self.parse_monthly_averages(payload)
        if self.cache is not None:
            self.cache.set(key, tuple(hsp))
        return hsp
