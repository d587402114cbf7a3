from datetime import timedelta

from django.db import models
from django.utils import timezone

METERS_PER_MILE = 1609.34


class RouteCache(models.Model):
    route_hash = models.CharField(max_length=64, unique=True, db_index=True)
    origin_text = models.CharField(max_length=255)
    destination_text = models.CharField(max_length=255)
    origin_place_id = models.CharField(max_length=255, blank=True, default="")
    destination_place_id = models.CharField(max_length=255, blank=True, default="")

    polyline = models.TextField()
    polyline_points = models.JSONField()
    distance_meters = models.IntegerField()
    duration_seconds = models.IntegerField()
    bounds = models.JSONField(default=dict)

    hit_count = models.IntegerField(default=1)
    view_count = models.IntegerField(default=0)

    is_curated = models.BooleanField(default=False)
    slug = models.SlugField(max_length=255, unique=True, null=True, blank=True)
    title = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    last_accessed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["origin_text", "destination_text"], name="routing_rou_origin__5d1c0e_idx"),
            models.Index(fields=["created_at"], name="routing_rou_created_9a7f3b_idx"),
            models.Index(fields=["is_curated"], name="routing_rou_is_cura_2c4e81_idx"),
            models.Index(fields=["-view_count"], name="routing_rou_view_co_b83d47_idx"),
        ]

    def __str__(self):
        return f"{self.origin_text} → {self.destination_text}"

    @property
    def points(self) -> list[tuple[float, float]]:
        return [(float(p["lat"]), float(p["lng"])) for p in self.polyline_points or []]

    @property
    def geometry(self):
        from roadtrip.planner.utils import RouteGeometry

        return RouteGeometry.from_points(self.points)

    @property
    def distance_miles(self) -> float:
        return self.distance_meters / METERS_PER_MILE

    @property
    def duration_hours(self) -> float:
        return self.duration_seconds / 3600

    @property
    def display_title(self) -> str:
        return self.title or f"{self.origin_text} to {self.destination_text}"

    def is_expired(self, ttl_days: int, now=None) -> bool:
        if self.is_curated:
            return False
        now = now or timezone.now()
        return (now - self.created_at) >= timedelta(days=ttl_days)
