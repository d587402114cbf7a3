from django.urls import path

from .views import CuratedRoutesView, RoadTripView, RouteDetailView

urlpatterns = [
    path("roadtrip", RoadTripView.as_view(), name="plan_road_trip"),
    path("routes/curated", CuratedRoutesView.as_view(), name="curated_routes"),
    path("routes/<slug:slug>", RouteDetailView.as_view(), name="route_detail"),
]
