from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.conf import settings

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import NoRouteFoundError, PolylineDecodeError, ProviderFetchError, UnsupportedRouteError
from .polyline import check_route_points, decode_polyline

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 500, 502, 503, 504)

NO_ROUTE_STATUSES = {
    "ZERO_RESULTS": "No route found between these locations",
    "NOT_FOUND": "One or both locations not found",
    "INVALID_REQUEST": "Invalid origin or destination",
}


@dataclass
class DirectionsResult:
    polyline: str
    points: list[tuple[float, float]]
    distance_meters: int
    duration_seconds: int
    bounds: dict = field(default_factory=dict)
    origin_place_id: str = ""
    destination_place_id: str = ""


def make_session(max_retries: int, backoff_factor: float) -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    retry = Retry(
        total=max_retries,
        connect=max_retries,
        read=max_retries,
        status=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset(["GET"]),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class DirectionsClient:
    """Google Directions API adapter.

    Retries and backoff live in the session's transport adapter; this class
    only turns the final response into a ``DirectionsResult`` or an error.
    """

    def __init__(self, api_key: str, base_url: str, *, timeout: float = 15.0, session: requests.Session | None = None):
        self.api_key = (api_key or "").strip()
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or make_session(max_retries=3, backoff_factor=0.5)

        if not self.api_key:
            raise RuntimeError("GOOGLE_MAPS_API_KEY is missing")

    @classmethod
    def from_settings(cls, session: requests.Session | None = None) -> "DirectionsClient":
        if session is None:
            session = make_session(settings.DIRECTIONS_MAX_RETRIES, settings.DIRECTIONS_BACKOFF_FACTOR)
        return cls(
            settings.GOOGLE_MAPS_API_KEY,
            settings.GOOGLE_DIRECTIONS_URL,
            timeout=settings.DIRECTIONS_TIMEOUT_SECONDS,
            session=session,
        )

    def fetch_route(self, origin: str, destination: str) -> DirectionsResult:
        params = {
            "origin": origin,
            "destination": destination,
            "mode": "driving",
            "key": self.api_key,
        }

        try:
            resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.error("Directions request failed for %r -> %r: %s", origin, destination, e)
            raise ProviderFetchError(f"Directions request failed: {e}") from e
        except ValueError as e:
            logger.error("Directions response was not JSON for %r -> %r", origin, destination)
            raise ProviderFetchError("Directions response was not valid JSON") from e

        status = (data or {}).get("status")
        if status != "OK":
            if status in NO_ROUTE_STATUSES:
                raise NoRouteFoundError(NO_ROUTE_STATUSES[status])
            message = data.get("error_message") or ""
            logger.error("Directions API returned %s for %r -> %r: %s", status, origin, destination, message)
            raise ProviderFetchError(f"Directions API error: {status}")

        return self._parse_route(data)

    def _parse_route(self, data: dict) -> DirectionsResult:
        try:
            route = data["routes"][0]
            legs = route["legs"]
            encoded = route["overview_polyline"]["points"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderFetchError("Directions response is missing route data") from e

        if len(legs) != 1:
            raise UnsupportedRouteError(f"Expected a single connected leg, got {len(legs)}")
        leg = legs[0]

        try:
            points = decode_polyline(encoded)
        except PolylineDecodeError:
            size = f"{len(encoded)} chars" if isinstance(encoded, str) else type(encoded).__name__
            logger.error("Could not decode polyline from directions response (%s)", size)
            raise

        if not points:
            raise PolylineDecodeError("Polyline decoded to no points")
        if len(points) == 1:
            points = points * 2
        check_route_points(points)

        try:
            distance_meters = int(leg["distance"]["value"])
            duration_seconds = int(leg["duration"]["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderFetchError("Could not extract distance and duration from directions response") from e

        return DirectionsResult(
            polyline=encoded,
            points=points,
            distance_meters=distance_meters,
            duration_seconds=duration_seconds,
            bounds=_parse_bounds(route.get("bounds"), points),
            origin_place_id=(leg.get("start_location") or {}).get("place_id", "") or "",
            destination_place_id=(leg.get("end_location") or {}).get("place_id", "") or "",
        )


def _parse_bounds(raw: dict | None, points: list[tuple[float, float]]) -> dict:
    try:
        return {
            "northeast": {"lat": float(raw["northeast"]["lat"]), "lng": float(raw["northeast"]["lng"])},
            "southwest": {"lat": float(raw["southwest"]["lat"]), "lng": float(raw["southwest"]["lng"])},
        }
    except (KeyError, TypeError, ValueError):
        lats = [p[0] for p in points]
        lngs = [p[1] for p in points]
        return {
            "northeast": {"lat": max(lats), "lng": max(lngs)},
            "southwest": {"lat": min(lats), "lng": min(lngs)},
        }


_default_client: DirectionsClient | None = None


def get_directions_client() -> DirectionsClient:
    global _default_client
    if _default_client is None:
        _default_client = DirectionsClient.from_settings()
    return _default_client
