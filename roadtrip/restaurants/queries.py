from __future__ import annotations

from math import cos, radians

from django.db.models import QuerySet

from roadtrip.restaurants.models import Restaurant

MILES_PER_DEGREE_LAT = 69.0


def get_restaurants_with_coordinates() -> QuerySet[Restaurant]:
    return Restaurant.objects.filter(is_public=True, latitude__isnull=False, longitude__isnull=False)


def get_candidate_restaurants(bounds: dict | None, radius_miles: float) -> QuerySet[Restaurant]:
    """Public restaurants inside the route's bounding box padded by ``radius_miles``.

    Only a coarse prefilter; the matcher does the exact distance check. Without
    bounds every restaurant with coordinates is returned.
    """
    qs = get_restaurants_with_coordinates()

    try:
        ne = bounds["northeast"]
        sw = bounds["southwest"]
        north, east = float(ne["lat"]), float(ne["lng"])
        south, west = float(sw["lat"]), float(sw["lng"])
    except (KeyError, TypeError, ValueError):
        return qs

    lat_pad = radius_miles / MILES_PER_DEGREE_LAT
    widest_lat = min(max(abs(north), abs(south)) + lat_pad, 89.0)
    lng_pad = radius_miles / (MILES_PER_DEGREE_LAT * cos(radians(widest_lat)))

    return qs.filter(
        latitude__gte=south - lat_pad,
        latitude__lte=north + lat_pad,
        longitude__gte=west - lng_pad,
        longitude__lte=east + lng_pad,
    )
