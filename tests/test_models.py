from datetime import timedelta

import pytest
from django.utils import timezone

from roadtrip.routing.models import RouteCache

pytestmark = pytest.mark.django_db


@pytest.fixture()
def route():
    return RouteCache.objects.create(
        route_hash="b" * 64,
        origin_text="nashville, tn",
        destination_text="cincinnati, oh",
        polyline="",
        polyline_points=[{"lat": 36.1627, "lng": -86.7816}, {"lat": 39.1031, "lng": -84.512}],
        distance_meters=437000,
        duration_seconds=14400,
    )


def test_points_and_geometry(route):
    assert route.points == [(36.1627, -86.7816), (39.1031, -84.512)]
    geometry = route.geometry
    assert len(geometry) == 2
    assert geometry.total_miles > 200


def test_display_values(route):
    assert route.distance_miles == pytest.approx(271.5, abs=0.1)
    assert route.duration_hours == 4
    assert route.display_title == "nashville, tn to cincinnati, oh"
    route.title = "Nashville to Cincinnati"
    assert route.display_title == "Nashville to Cincinnati"


def test_expiry(route):
    now = timezone.now()
    assert not route.is_expired(30, now=now)
    assert route.is_expired(30, now=now + timedelta(days=30))
    route.is_curated = True
    assert not route.is_expired(30, now=now + timedelta(days=365))


def test_str(route):
    assert str(route) == "nashville, tn → cincinnati, oh"
