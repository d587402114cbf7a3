# planner/views.py

import logging
import time

from django.conf import settings
from django.shortcuts import get_object_or_404

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from roadtrip.routing.background import get_view_recorder
from roadtrip.routing.directions import get_directions_client
from roadtrip.routing.errors import (
    NoRouteFoundError,
    PolylineDecodeError,
    ProviderFetchError,
    UnsupportedRouteError,
)
from roadtrip.routing.models import RouteCache
from roadtrip.routing.serializers import (
    CuratedRouteSerializer,
    RestaurantNearRouteSerializer,
    RoadTripRequestSerializer,
    RouteSerializer,
)
from roadtrip.routing.service import RoutingService, ensure_route_slug

from .service import restaurants_near_route

logger = logging.getLogger(__name__)


class RoadTripView(APIView):

    def get_routing_service(self) -> RoutingService:
        return RoutingService(get_directions_client())

    def post(self, request):
        start_time = time.time()

        serializer = RoadTripRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid input", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        origin = serializer.validated_data["origin"]
        destination = serializer.validated_data["destination"]
        radius_miles = serializer.validated_data["radius_miles"]

        try:
            lookup = self.get_routing_service().get_route(origin, destination)
            matches = restaurants_near_route(lookup.route, radius_miles)
        except NoRouteFoundError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        except UnsupportedRouteError as e:
            return Response({"error": str(e)}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)
        except (ProviderFetchError, PolylineDecodeError) as e:
            logger.error("Road trip %r -> %r failed: %s", origin, destination, e)
            return Response({"error": str(e)}, status=status.HTTP_502_BAD_GATEWAY)
        except Exception:
            logger.exception("Unexpected error planning road trip %r -> %r", origin, destination)
            return Response(
                {"error": "Internal server error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        response_data = {
            "route": RouteSerializer(lookup.route).data,
            "restaurants": RestaurantNearRouteSerializer(matches, many=True).data,
            "cached": lookup.cache_hit,
            "radius_miles": radius_miles,
            "computation_time_ms": int((time.time() - start_time) * 1000),
        }
        return Response(response_data, status=status.HTTP_200_OK)


class RouteDetailView(APIView):

    def get_view_recorder(self):
        return get_view_recorder()

    def get(self, request, slug):
        route = get_object_or_404(RouteCache, slug=slug)
        radius_miles = settings.ROADTRIP_ROUTE_PAGE_RADIUS_MILES

        try:
            matches = restaurants_near_route(route, radius_miles)
        except UnsupportedRouteError as e:
            return Response({"error": str(e)}, status=status.HTTP_422_UNPROCESSABLE_ENTITY)

        self.get_view_recorder().record(route.pk)

        return Response(
            {
                "route": RouteSerializer(route).data,
                "restaurants": RestaurantNearRouteSerializer(matches, many=True).data,
                "radius_miles": radius_miles,
            },
            status=status.HTTP_200_OK,
        )


class CuratedRoutesView(APIView):

    def get(self, request):
        radius_miles = settings.ROADTRIP_CURATED_COUNT_RADIUS_MILES
        routes = list(RouteCache.objects.filter(is_curated=True).order_by("-view_count", "id"))

        for route in routes:
            ensure_route_slug(route)
            try:
                route.restaurant_count = len(restaurants_near_route(route, radius_miles))
            except UnsupportedRouteError:
                logger.warning("Curated route %s has an unsupported shape", route.slug)
                route.restaurant_count = 0

        return Response(
            {"routes": CuratedRouteSerializer(routes, many=True).data},
            status=status.HTTP_200_OK,
        )
