from __future__ import annotations

from dataclasses import dataclass
from math import asin, cos, isfinite, radians, sin, sqrt
from typing import Any, Iterable, Sequence

from roadtrip.routing.polyline import check_route_points

EARTH_RADIUS_MILES = 3959.0


@dataclass(frozen=True)
class Waypoint:
    lat: float
    lng: float
    cumulative_miles: float


@dataclass(frozen=True)
class RestaurantNearRoute:
    restaurant: Any
    distance_miles: float
    route_position: float


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    R = EARTH_RADIUS_MILES
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    return 2 * R * asin(min(1.0, sqrt(a)))


class RouteGeometry:
    """A route polyline with cumulative distances precomputed.

    ``waypoints[i].cumulative_miles`` is the haversine path length from the
    origin to vertex ``i``, so the last waypoint holds the total length.
    """

    def __init__(self, waypoints: list[Waypoint]):
        self.waypoints = waypoints

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]]) -> "RouteGeometry":
        coords = [(float(lat), float(lng)) for lat, lng in points]
        check_route_points(coords)

        waypoints: list[Waypoint] = []
        cum = 0.0
        prev = None
        for lat, lng in coords:
            if prev is not None:
                cum += haversine_miles(prev[0], prev[1], lat, lng)
            waypoints.append(Waypoint(lat=lat, lng=lng, cumulative_miles=cum))
            prev = (lat, lng)
        return cls(waypoints)

    @property
    def total_miles(self) -> float:
        return self.waypoints[-1].cumulative_miles if self.waypoints else 0.0

    def __len__(self) -> int:
        return len(self.waypoints)

    def nearest_point(self, lat: float, lng: float) -> tuple[float, float]:
        """Return ``(distance_miles, route_position)`` of the closest point on the route."""
        wps = self.waypoints
        total = self.total_miles

        if len(wps) == 1 or total <= 0:
            return haversine_miles(lat, lng, wps[0].lat, wps[0].lng), 0.0

        best_distance = float("inf")
        best_index = 0
        best_t = 0.0

        for i in range(len(wps) - 1):
            a, b = wps[i], wps[i + 1]
            t = _project_onto_segment(lat, lng, a, b)
            plat = a.lat + t * (b.lat - a.lat)
            plng = a.lng + t * (b.lng - a.lng)
            d = haversine_miles(lat, lng, plat, plng)
            if d < best_distance:
                best_distance = d
                best_index = i
                best_t = t

        start = wps[best_index]
        seg_len = wps[best_index + 1].cumulative_miles - start.cumulative_miles
        position = (start.cumulative_miles + best_t * seg_len) / total
        return best_distance, min(1.0, max(0.0, position))


def _project_onto_segment(lat: float, lng: float, a: Waypoint, b: Waypoint) -> float:
    # Equirectangular projection around the segment's mean latitude
    kx = cos(radians((a.lat + b.lat) / 2))
    ax, ay = a.lng * kx, a.lat
    bx, by = b.lng * kx, b.lat
    px, py = lng * kx, lat

    dx, dy = bx - ax, by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return 0.0
    t = ((px - ax) * dx + (py - ay) * dy) / length_sq
    return min(1.0, max(0.0, t))


def _coordinates(candidate: Any) -> tuple[float, float] | None:
    lat = getattr(candidate, "latitude", None)
    lng = getattr(candidate, "longitude", None)
    if lat is None or lng is None:
        return None
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        return None
    if not (isfinite(lat) and isfinite(lng)):
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def match_restaurants(
    route: RouteGeometry,
    candidates: Iterable[Any],
    radius_miles: float,
) -> list[RestaurantNearRoute]:
    """Restaurants within ``radius_miles`` of the route, ordered along it.

    Candidates without usable coordinates or farther than the radius are
    skipped. The radius is inclusive.
    """
    if radius_miles < 0:
        raise ValueError("radius_miles must be non-negative")
    if not len(route):
        return []

    matches: list[RestaurantNearRoute] = []
    for candidate in candidates:
        coords = _coordinates(candidate)
        if coords is None:
            continue

        distance, position = route.nearest_point(*coords)
        if distance > radius_miles:
            continue

        matches.append(RestaurantNearRoute(restaurant=candidate, distance_miles=distance, route_position=position))

    matches.sort(key=lambda m: (m.route_position, m.distance_miles))
    return matches

