"""Geographic (WGS84) to UTM conversion for the access-request siting fields.

The zone is fixed at 23 (central meridian 45W), which covers the region the
application serves. Points far from that meridian are still projected on
zone 23; the result is valid as a planar reference but is not the "true"
UTM zone of the point.
"""
import math
from typing import Tuple

from .models import GeoCoordinate, UtmCoordinate

# WGS84 ellipsoid
WGS84_A = 6378137.0
WGS84_F = 1 / 298.257223563
K0 = 0.9996

UTM_ZONE = 23
FALSE_EASTING = 500000.0
FALSE_NORTHING_SOUTH = 10000000.0


def central_meridian(zone: int) -> float:
    return -183.0 + 6.0 * zone


def _meridional_arc(phi: float, e2: float) -> float:
    e4 = e2 * e2
    e6 = e4 * e2
    return WGS84_A * (
        (1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * phi
        - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024) * math.sin(2 * phi)
        + (15 * e4 / 256 + 45 * e6 / 1024) * math.sin(4 * phi)
        - (35 * e6 / 3072) * math.sin(6 * phi)
    )


def _project(longitude: float, latitude: float, zone: int) -> Tuple[float, float]:
    e2 = WGS84_F * (2 - WGS84_F)
    ep2 = e2 / (1 - e2)

    phi = math.radians(latitude)
    dlam = math.radians(longitude - central_meridian(zone))

    sin_phi = math.sin(phi)
    cos_phi = math.cos(phi)
    tan_phi = math.tan(phi)

    n = WGS84_A / math.sqrt(1 - e2 * sin_phi * sin_phi)
    t = tan_phi * tan_phi
    c = ep2 * cos_phi * cos_phi
    a = cos_phi * dlam
    m = _meridional_arc(phi, e2)

    easting = K0 * n * (
        a
        + (1 - t + c) * a ** 3 / 6
        + (5 - 18 * t + t * t + 72 * c - 58 * ep2) * a ** 5 / 120
    ) + FALSE_EASTING

    northing = K0 * (
        m
        + n * tan_phi * (
            a * a / 2
            + (5 - t + 9 * c + 4 * c * c) * a ** 4 / 24
            + (61 - 58 * t + t * t + 600 * c - 330 * ep2) * a ** 6 / 720
        )
    )
    if latitude < 0:
        northing += FALSE_NORTHING_SOUTH
    return easting, northing


def to_utm(longitude: float, latitude: float) -> UtmCoordinate:
    """Converts decimal degrees to UTM zone 23 easting/northing, rounded to the metre.

    Raises InvalidInputError for non-finite values, |latitude| > 90 or |longitude| > 180.
    """
    coord = GeoCoordinate(longitude=float(longitude), latitude=float(latitude))
    easting, northing = _project(coord.longitude, coord.latitude, UTM_ZONE)
    return UtmCoordinate(
        easting=int(round(easting)),
        northing=int(round(northing)),
        zone=UTM_ZONE,
        hemisphere="N" if coord.latitude >= 0 else "S",
    )


def format_utm(utm: UtmCoordinate) -> Tuple[str, str, str]:
    """Returns (easting, northing, zone) labels as printed on the access-request form."""
    return f"E {utm.easting} m", f"N {utm.northing} m", utm.zone_label
