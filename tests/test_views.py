from math import cos, pi, radians

import pytest
from django.urls import reverse

from roadtrip.planner.utils import EARTH_RADIUS_MILES
from roadtrip.planner.views import RoadTripView, RouteDetailView
from roadtrip.routing.background import RouteViewRecorder
from roadtrip.routing.errors import NoRouteFoundError, PolylineDecodeError, ProviderFetchError, UnsupportedRouteError
from roadtrip.routing.models import RouteCache
from roadtrip.routing.service import RoutingService

from .conftest import FakeDirectionsClient, InlineExecutor

pytestmark = pytest.mark.django_db

MILES_PER_DEGREE = EARTH_RADIUS_MILES * pi / 180


def east_of(lat, lng, miles):
    return lat, lng + miles / (MILES_PER_DEGREE * cos(radians(lat)))


@pytest.fixture()
def use_directions(monkeypatch):
    def _use(client):
        monkeypatch.setattr(RoadTripView, "get_routing_service", lambda self: RoutingService(client, cache_ttl_days=30))
        return client

    return _use


@pytest.fixture()
def inline_executor(monkeypatch):
    executor = InlineExecutor()
    monkeypatch.setattr(
        RouteDetailView,
        "get_view_recorder",
        lambda self: RouteViewRecorder(executor, close_connections=False),
    )
    return executor


def plan(api_client, **body):
    return api_client.post(reverse("plan_road_trip"), body, format="json")


def test_plan_road_trip_returns_restaurants_along_route(api_client, use_directions, fake_directions, make_restaurant):
    use_directions(fake_directions)
    near_middle = make_restaurant(*east_of(35.0, -120.0, 5), name="Middle Diner", google_review_count=1520)
    near_start = make_restaurant(*east_of(34.1, -120.0, 2), name="Start Diner")
    make_restaurant(*east_of(35.0, -120.0, 50), name="Far Diner")
    make_restaurant(None, None, name="Unknown Location")
    make_restaurant(*east_of(35.5, -120.0, 1), name="Hidden Diner", is_public=False)

    resp = plan(api_client, origin="San Francisco, CA", destination="Los Angeles, CA", radius_miles=10)

    assert resp.status_code == 200
    data = resp.json()
    assert data["cached"] is False
    assert data["route"]["slug"] == "san-francisco-ca-to-los-angeles-ca"
    assert data["route"]["distance_meters"] == 370000
    assert len(data["route"]["polyline_points"]) == 3

    names = [r["name"] for r in data["restaurants"]]
    assert names == ["Start Diner", "Middle Diner"]
    middle = data["restaurants"][1]
    assert middle["id"] == near_middle.id
    assert middle["distance_miles"] == pytest.approx(5.0, abs=0.05)
    assert middle["route_position"] == pytest.approx(0.5, abs=0.01)
    assert middle["google_review_count"] == 1520
    assert data["restaurants"][0]["google_review_count"] is None
    assert data["restaurants"][0]["id"] == near_start.id


def test_second_request_is_cached(api_client, use_directions, fake_directions):
    use_directions(fake_directions)

    first = plan(api_client, origin="San Francisco, CA", destination="Los Angeles, CA")
    second = plan(api_client, origin="  SAN FRANCISCO, ca", destination="los angeles,  CA ")

    assert first.json()["cached"] is False
    assert second.status_code == 200
    assert second.json()["cached"] is True
    assert len(fake_directions.calls) == 1


def test_default_radius_applied(api_client, use_directions, fake_directions, settings):
    settings.ROADTRIP_DEFAULT_RADIUS_MILES = 12
    use_directions(fake_directions)

    resp = plan(api_client, origin="A", destination="B")

    assert resp.json()["radius_miles"] == 12


def test_empty_candidates_gives_empty_list(api_client, use_directions, fake_directions):
    use_directions(fake_directions)

    resp = plan(api_client, origin="A", destination="B", radius_miles=10)

    assert resp.status_code == 200
    assert resp.json()["restaurants"] == []


@pytest.mark.parametrize(
    "body",
    [
        {"destination": "Los Angeles, CA"},
        {"origin": "   ", "destination": "Los Angeles, CA"},
        {"origin": "x" * 201, "destination": "Los Angeles, CA"},
        {"origin": "San Francisco, CA", "destination": "Los Angeles, CA", "radius_miles": 500},
        {"origin": "San Francisco, CA", "destination": "Los Angeles, CA", "radius_miles": 0},
        {"origin": "San Francisco, CA", "destination": "Los Angeles, CA", "radius_miles": "far"},
    ],
)
def test_invalid_input_is_rejected(api_client, use_directions, fake_directions, body):
    use_directions(fake_directions)

    resp = api_client.post(reverse("plan_road_trip"), body, format="json")

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid input"
    assert fake_directions.calls == []


@pytest.mark.parametrize(
    "error, expected_status",
    [
        (NoRouteFoundError("No route found between these locations"), 404),
        (UnsupportedRouteError("Routes crossing the antimeridian are not supported"), 422),
        (ProviderFetchError("Directions request failed"), 502),
        (PolylineDecodeError("Polyline truncated at position 3"), 502),
    ],
)
def test_provider_errors_map_to_status(api_client, use_directions, error, expected_status):
    use_directions(FakeDirectionsClient(error=error))

    resp = plan(api_client, origin="Honolulu, HI", destination="Tokyo, Japan")

    assert resp.status_code == expected_status
    assert resp.json()["error"] == str(error)
    assert not RouteCache.objects.exists()


def test_unexpected_error_is_500(api_client, use_directions):
    use_directions(FakeDirectionsClient(error=KeyError("boom")))

    resp = plan(api_client, origin="A", destination="B")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_route_detail_counts_view(api_client, use_directions, fake_directions, inline_executor, make_restaurant):
    use_directions(fake_directions)
    make_restaurant(*east_of(35.0, -120.0, 20), name="Twenty Miles Out")
    slug = plan(api_client, origin="San Francisco, CA", destination="Los Angeles, CA").json()["route"]["slug"]

    resp = api_client.get(reverse("route_detail", kwargs={"slug": slug}))

    assert resp.status_code == 200
    data = resp.json()
    assert data["radius_miles"] == 25
    assert [r["name"] for r in data["restaurants"]] == ["Twenty Miles Out"]
    assert inline_executor.submitted == 1
    assert RouteCache.objects.get(slug=slug).view_count == 1


def test_route_detail_unknown_slug(api_client, inline_executor):
    resp = api_client.get(reverse("route_detail", kwargs={"slug": "nowhere-to-nothing"}))

    assert resp.status_code == 404
    assert inline_executor.submitted == 0


def test_curated_routes_listing(api_client, use_directions, fake_directions, make_restaurant):
    use_directions(fake_directions)
    make_restaurant(*east_of(35.0, -120.0, 3))
    plan(api_client, origin="San Francisco, CA", destination="Los Angeles, CA")
    plan(api_client, origin="Austin, TX", destination="San Antonio, TX")
    RouteCache.objects.filter(origin_text="san francisco, ca").update(
        is_curated=True, slug="sf-to-la", title="San Francisco to Los Angeles", view_count=5
    )

    resp = api_client.get(reverse("curated_routes"))

    assert resp.status_code == 200
    routes = resp.json()["routes"]
    assert len(routes) == 1
    assert routes[0]["slug"] == "sf-to-la"
    assert routes[0]["title"] == "San Francisco to Los Angeles"
    assert routes[0]["restaurant_count"] == 1
    assert "polyline_points" not in routes[0]


def test_curated_counts_use_wider_radius(api_client, use_directions, fake_directions, make_restaurant, settings):
    use_directions(fake_directions)
    make_restaurant(*east_of(35.0, -120.0, 12))
    plan(api_client, origin="San Francisco, CA", destination="Los Angeles, CA")
    RouteCache.objects.update(is_curated=True)

    resp = api_client.get(reverse("curated_routes"))
    assert resp.json()["routes"][0]["restaurant_count"] == 1

    settings.ROADTRIP_CURATED_COUNT_RADIUS_MILES = 10
    resp = api_client.get(reverse("curated_routes"))
    assert resp.json()["routes"][0]["restaurant_count"] == 0
