import pytest

from roadtrip.restaurants.queries import get_candidate_restaurants, get_restaurants_with_coordinates

pytestmark = pytest.mark.django_db

BOUNDS = {
    "northeast": {"lat": 36.0, "lng": -119.0},
    "southwest": {"lat": 34.0, "lng": -121.0},
}


def test_only_public_restaurants_with_coordinates(make_restaurant):
    visible = make_restaurant(35.0, -120.0)
    make_restaurant(None, -120.0)
    make_restaurant(35.0, None)
    make_restaurant(35.0, -120.0, is_public=False)

    assert list(get_restaurants_with_coordinates()) == [visible]


def test_candidates_limited_to_padded_bounds(make_restaurant):
    inside = make_restaurant(35.0, -120.0)
    just_outside_box = make_restaurant(36.1, -120.0)
    far_away = make_restaurant(40.7, -74.0)

    candidates = set(get_candidate_restaurants(BOUNDS, radius_miles=10))

    assert inside in candidates
    assert just_outside_box in candidates
    assert far_away not in candidates


def test_padding_grows_with_radius(make_restaurant):
    east = make_restaurant(35.0, -118.5)

    assert east not in set(get_candidate_restaurants(BOUNDS, radius_miles=10))
    assert east in set(get_candidate_restaurants(BOUNDS, radius_miles=50))


def test_missing_bounds_returns_everything(make_restaurant):
    a = make_restaurant(35.0, -120.0)
    b = make_restaurant(40.7, -74.0)

    assert set(get_candidate_restaurants({}, radius_miles=10)) == {a, b}
    assert set(get_candidate_restaurants(None, radius_miles=10)) == {a, b}
