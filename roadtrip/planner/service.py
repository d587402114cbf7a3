from __future__ import annotations

from roadtrip.restaurants.queries import get_candidate_restaurants
from roadtrip.routing.models import RouteCache

from .utils import RestaurantNearRoute, match_restaurants


def restaurants_near_route(route: RouteCache, radius_miles: float) -> list[RestaurantNearRoute]:
    """Match the stored route against the restaurants in its padded bounding box."""
    candidates = get_candidate_restaurants(route.bounds, radius_miles)
    return match_restaurants(route.geometry, candidates, radius_miles)
