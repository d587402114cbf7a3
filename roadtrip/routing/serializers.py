from django.conf import settings

from rest_framework import serializers

from .models import RouteCache


class RoadTripRequestSerializer(serializers.Serializer):
    origin = serializers.CharField(
        max_length=200,
        trim_whitespace=True,
        help_text="Start location (e.g., 'San Francisco, CA')",
    )
    destination = serializers.CharField(
        max_length=200,
        trim_whitespace=True,
        help_text="End location (e.g., 'Los Angeles, CA')",
    )
    radius_miles = serializers.FloatField(
        required=False,
        help_text="Search radius around the route in miles",
    )

    def validate_radius_miles(self, value):
        low = settings.ROADTRIP_MIN_RADIUS_MILES
        high = settings.ROADTRIP_MAX_RADIUS_MILES
        if not (low <= value <= high):
            raise serializers.ValidationError(f"radius_miles must be between {low:g} and {high:g}")
        return value

    def validate(self, attrs):
        attrs.setdefault("radius_miles", settings.ROADTRIP_DEFAULT_RADIUS_MILES)
        return attrs


class RestaurantSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    country = serializers.CharField()
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()
    status = serializers.CharField()
    price_tier = serializers.CharField()
    cuisine_tags = serializers.ListField(child=serializers.CharField())
    description = serializers.CharField()
    photo_url = serializers.CharField()
    photos = serializers.ListField(child=serializers.CharField())
    google_rating = serializers.DecimalField(max_digits=2, decimal_places=1, allow_null=True)
    google_review_count = serializers.IntegerField(allow_null=True)


class RestaurantNearRouteSerializer(serializers.Serializer):
    restaurant = RestaurantSerializer()
    distance_miles = serializers.SerializerMethodField()
    route_position = serializers.SerializerMethodField()

    def get_distance_miles(self, obj):
        return round(obj.distance_miles, 2)

    def get_route_position(self, obj):
        return round(obj.route_position, 4)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        restaurant = data.pop("restaurant")
        return {**restaurant, **data}


class RouteSerializer(serializers.ModelSerializer):
    title = serializers.CharField(source="display_title")
    distance_miles = serializers.SerializerMethodField()
    duration_hours = serializers.SerializerMethodField()

    class Meta:
        model = RouteCache
        fields = [
            "id",
            "slug",
            "title",
            "description",
            "origin_text",
            "destination_text",
            "polyline",
            "polyline_points",
            "distance_meters",
            "duration_seconds",
            "distance_miles",
            "duration_hours",
            "bounds",
            "is_curated",
            "hit_count",
            "view_count",
            "created_at",
        ]

    def get_distance_miles(self, obj):
        return round(obj.distance_miles, 1)

    def get_duration_hours(self, obj):
        return round(obj.duration_hours, 1)


class CuratedRouteSerializer(RouteSerializer):
    restaurant_count = serializers.IntegerField()

    class Meta(RouteSerializer.Meta):
        fields = [f for f in RouteSerializer.Meta.fields if f not in ("polyline", "polyline_points")] + [
            "restaurant_count"
        ]
