from __future__ import annotations

import hashlib
import json
import logging
import re
from dataclasses import dataclass

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.text import slugify

from .directions import DirectionsClient, DirectionsResult
from .models import RouteCache

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_location_text(text: str) -> str:
    return _WHITESPACE.sub(" ", (text or "").strip()).casefold()


def generate_cache_key(origin: str, destination: str) -> str:
    route_data = json.dumps(
        {"origin": normalize_location_text(origin), "destination": normalize_location_text(destination)},
        sort_keys=True,
    )
    return hashlib.sha256(route_data.encode()).hexdigest()


@dataclass
class RouteLookup:
    route: RouteCache
    cache_hit: bool


class RoutingService:

    def __init__(self, directions_client: DirectionsClient, cache_ttl_days: int | None = None):
        self.directions = directions_client
        self.cache_ttl_days = cache_ttl_days if cache_ttl_days is not None else settings.ROUTE_CACHE_TTL_DAYS

    def get_route(self, origin: str, destination: str) -> RouteLookup:
        cached = self.find_cached_route(origin, destination)
        if cached:
            ensure_route_slug(cached)
            return RouteLookup(route=cached, cache_hit=True)

        logger.info("Route cache miss: %r -> %r", origin, destination)
        route = self.fetch_route(origin, destination)
        ensure_route_slug(route)
        return RouteLookup(route=route, cache_hit=False)

    def find_cached_route(self, origin: str, destination: str) -> RouteCache | None:
        cache_key = generate_cache_key(origin, destination)
        try:
            cached = RouteCache.objects.get(route_hash=cache_key)
        except RouteCache.DoesNotExist:
            return None

        if cached.is_expired(self.cache_ttl_days):
            logger.info("Dropping expired cached route %s (%s)", cached.pk, cached)
            cached.delete()
            return None

        self._record_hit(cached)
        logger.info(
            "Route cache hit: %r -> %r (route=%s hits=%s)",
            origin,
            destination,
            cached.pk,
            cached.hit_count,
        )
        return cached

    def fetch_route(self, origin: str, destination: str) -> RouteCache:
        result = self.directions.fetch_route(origin, destination)
        return self._save_to_cache(origin, destination, result)

    def _record_hit(self, route: RouteCache) -> None:
        now = timezone.now()
        try:
            RouteCache.objects.filter(pk=route.pk).update(hit_count=F("hit_count") + 1, last_accessed_at=now)
        except DatabaseError:
            logger.warning("Could not record cache hit for route %s", route.pk, exc_info=True)
            return
        route.hit_count += 1
        route.last_accessed_at = now

    def _save_to_cache(self, origin: str, destination: str, result: DirectionsResult) -> RouteCache:
        cache_key = generate_cache_key(origin, destination)
        try:
            with transaction.atomic():
                return RouteCache.objects.create(
                    route_hash=cache_key,
                    origin_text=normalize_location_text(origin),
                    destination_text=normalize_location_text(destination),
                    origin_place_id=result.origin_place_id,
                    destination_place_id=result.destination_place_id,
                    polyline=result.polyline,
                    polyline_points=[{"lat": lat, "lng": lng} for lat, lng in result.points],
                    distance_meters=result.distance_meters,
                    duration_seconds=result.duration_seconds,
                    bounds=result.bounds,
                )
        except IntegrityError:
            # A concurrent request cached the same pair first
            logger.info("Route %r -> %r was cached concurrently; using existing row", origin, destination)
            return RouteCache.objects.get(route_hash=cache_key)


def build_route_slug(origin: str, destination: str) -> str:
    return slugify(f"{origin} to {destination}")[:240].strip("-") or "route"


def ensure_route_slug(route: RouteCache) -> str | None:
    """Give ``route`` a unique slug if it has none yet and return it."""
    if route.slug:
        return route.slug

    base = build_route_slug(route.origin_text, route.destination_text)
    candidates = [base, f"{base}-{route.route_hash[:8]}", f"{base}-{route.pk}"]
    if RouteCache.objects.filter(slug=base).exclude(pk=route.pk).exists():
        candidates.pop(0)

    updated = 0
    for candidate in candidates:
        try:
            with transaction.atomic():
                updated = RouteCache.objects.filter(pk=route.pk, slug__isnull=True).update(slug=candidate)
            break
        except IntegrityError:
            logger.info("Slug %s is taken; trying the next one", candidate)
    else:
        logger.warning("Could not find a free slug for route %s", route.pk)
        return route.slug

    if not updated:
        route.refresh_from_db(fields=["slug"])
        return route.slug

    route.slug = candidate
    return candidate
