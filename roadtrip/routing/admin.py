from django.contrib import admin

from .models import RouteCache


@admin.register(RouteCache)
class RouteCacheAdmin(admin.ModelAdmin):
    list_display = ("origin_text", "destination_text", "slug", "is_curated", "hit_count", "view_count", "created_at")
    list_filter = ("is_curated",)
    search_fields = ("origin_text", "destination_text", "slug", "title")
    readonly_fields = ("route_hash", "polyline", "polyline_points", "bounds", "created_at", "last_accessed_at")
