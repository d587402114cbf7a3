class RoadTripError(Exception):
    """Base class for errors raised while planning a road trip."""


class ProviderFetchError(RoadTripError):
    """The directions provider could not be reached or returned an unusable answer."""


class NoRouteFoundError(RoadTripError):
    """The provider understood the request but has no driving route for it."""


class PolylineDecodeError(RoadTripError):
    """An encoded polyline could not be decoded."""


class UnsupportedRouteError(RoadTripError):
    """The route has a shape the matcher does not handle (antimeridian, disconnected legs)."""
