"""
Distance calculation using the Haversine formula.

Assumption
----------
Vendors are compared by great-circle distance on a sphere of mean Earth
radius (6 371 km), not WGS-84 ellipsoidal distance and not road distance.
Over the 1-50 km search radii the error is well below the 0.1 km shown
to customers.

The exact sequence of operations below is kept stable so that distances
match the ones legacy clients have always been shown.

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .entities import Location

EARTH_RADIUS_M = 6_371_000.0

# Widens the pre-filter box so float error never drops a boundary vendor.
_BOX_MARGIN = 1.001


def haversine_m(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **meters** between two points."""
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_m(origin: Location, target: Location) -> float:
    return haversine_m(
        origin.latitude, origin.longitude, target.latitude, target.longitude
    )


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, location: Location) -> bool:
        return (
            self.min_lat <= location.latitude <= self.max_lat
            and self.min_lng <= location.longitude <= self.max_lng
        )


def bounding_box(origin: Location, radius_m: float) -> Optional[BoundingBox]:
    """
    Return a lat/lng box enclosing every point within *radius_m* of
    *origin*, or ``None`` when the box would wrap a pole or the
    antimeridian.  ``None`` means "no pre-filter possible, scan everything".

    Longitude half-width uses the spherical bound
    ``asin(sin(r / R) / cos(lat))``, which is tight for the tangent
    meridians rather than the naive ``r / (R cos lat)`` approximation.
    """
    angular = radius_m / EARTH_RADIUS_M * _BOX_MARGIN
    dlat = math.degrees(angular)

    min_lat = origin.latitude - dlat
    max_lat = origin.latitude + dlat
    if min_lat <= -90.0 or max_lat >= 90.0:
        return None

    ratio = math.sin(angular) / math.cos(math.radians(origin.latitude))
    if ratio >= 1.0:
        return None
    dlng = math.degrees(math.asin(ratio))

    min_lng = origin.longitude - dlng
    max_lng = origin.longitude + dlng
    if min_lng < -180.0 or max_lng > 180.0:
        return None

    return BoundingBox(min_lat, max_lat, min_lng, max_lng)
