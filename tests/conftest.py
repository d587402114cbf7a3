from concurrent.futures import Executor, Future

import pytest
from rest_framework.test import APIClient

from roadtrip.restaurants.models import Restaurant
from roadtrip.routing.directions import DirectionsResult
from roadtrip.routing.polyline import encode_polyline

# Three points running north along the 120°W meridian
COAST_POINTS = [(34.0, -120.0), (35.0, -120.0), (36.0, -120.0)]


class FakeDirectionsClient:
    def __init__(self, points=None, distance_meters=370000, duration_seconds=21600, error=None):
        self.points = points or COAST_POINTS
        self.distance_meters = distance_meters
        self.duration_seconds = duration_seconds
        self.error = error
        self.calls = []

    def fetch_route(self, origin, destination):
        self.calls.append((origin, destination))
        if self.error is not None:
            raise self.error
        lats = [p[0] for p in self.points]
        lngs = [p[1] for p in self.points]
        return DirectionsResult(
            polyline=encode_polyline(self.points),
            points=list(self.points),
            distance_meters=self.distance_meters,
            duration_seconds=self.duration_seconds,
            bounds={
                "northeast": {"lat": max(lats), "lng": max(lngs)},
                "southwest": {"lat": min(lats), "lng": min(lngs)},
            },
            origin_place_id="place-origin",
            destination_place_id="place-destination",
        )


class InlineExecutor(Executor):
    def __init__(self):
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


@pytest.fixture()
def fake_directions():
    return FakeDirectionsClient()


@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def make_restaurant(db):
    counter = {"n": 0}

    def _make(lat, lng, **kwargs):
        counter["n"] += 1
        n = counter["n"]
        defaults = {
            "name": f"Diner {n}",
            "slug": f"diner-{n}",
            "city": "Somewhere",
            "state": "CA",
            "status": "open",
            "latitude": lat,
            "longitude": lng,
        }
        defaults.update(kwargs)
        return Restaurant.objects.create(**defaults)

    return _make
