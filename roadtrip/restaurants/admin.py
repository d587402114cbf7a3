from django.contrib import admin

from .models import Restaurant


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "state", "status", "price_tier", "is_public")
    list_filter = ("status", "price_tier", "is_public", "state")
    search_fields = ("name", "city", "slug")
    prepopulated_fields = {"slug": ("name",)}
