"""Spherical geometry: lat/lon <-> unit sphere, angular distance, and slerp.

Every other module goes through this one to move between geographic and
Cartesian coordinates, so route points, boundary curves, and sun angles all
agree on the same mapping:

    phi   = (90 - lat) * pi / 180
    theta = (lon + 180) * pi / 180
    x = -sin(phi) * cos(theta),  y = cos(phi),  z = sin(phi) * sin(theta)

The +y axis points at the north pole.
"""

import math

from sunroute.models import GeoPoint, UnitVector3

_NORTH = UnitVector3(0.0, 1.0, 0.0)
_FALLBACK_AXIS = UnitVector3(1.0, 0.0, 0.0)

# Endpoints whose unit vectors sum to less than this are treated as antipodal
_ANTIPODAL_EPS = 1e-6


def normalize_longitude(lng: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return (lng + 180.0) % 360.0 - 180.0


def to_unit_vector(point: GeoPoint) -> UnitVector3:
    """Map a GeoPoint onto the unit sphere."""
    phi = (90.0 - point.lat) * math.pi / 180.0
    theta = (point.lng + 180.0) * math.pi / 180.0
    sin_phi = math.sin(phi)
    return UnitVector3(
        -sin_phi * math.cos(theta),
        math.cos(phi),
        sin_phi * math.sin(theta),
    )


def to_geo_point(v: UnitVector3) -> GeoPoint:
    """Inverse of `to_unit_vector`.

    Both angles come from atan2, so the vector does not have to be normalised
    and latitudes near the poles keep full precision. Longitude is returned in
    [-180, 180), so +180 comes back as -180. At the poles longitude is
    arbitrary.
    """
    phi = math.atan2(math.hypot(v.x, v.z), v.y)
    theta = math.atan2(v.z, -v.x)
    lat = 90.0 - phi * 180.0 / math.pi
    lng = normalize_longitude(theta * 180.0 / math.pi - 180.0)
    return GeoPoint(lat=lat, lng=lng)


def angular_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle angle between two points, in degrees [0, 180].

    Spherical law of cosines. The cosine is clamped to [-1, 1] so rounding
    overshoot never reaches acos as a NaN.
    """
    if a == b:
        return 0.0
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlng = math.radians(b.lng - a.lng)
    cos_angle = math.sin(lat1) * math.sin(lat2) + math.cos(lat1) * math.cos(
        lat2
    ) * math.cos(dlng)
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.degrees(math.acos(cos_angle))


def _perpendicular(v: UnitVector3) -> UnitVector3:
    """A fixed unit vector perpendicular to `v`: northward along its meridian."""
    for axis in (_NORTH, _FALLBACK_AXIS):
        p = axis - v.scaled(axis.dot(v))
        if p.norm() > 1e-12:
            return p.normalized()
    raise AssertionError("unreachable: two orthogonal axes cannot both be parallel to v")


def slerp_points(a: GeoPoint, b: GeoPoint, fraction: float) -> GeoPoint:
    """Spherical linear interpolation from `a` to `b` along the minor arc.

    Args:
        a: Start point (returned for fraction 0).
        b: End point (returned for fraction 1).
        fraction: Position along the arc. Values outside [0, 1] extrapolate
            along the same great circle.

    Returns:
        The interpolated GeoPoint. Coincident endpoints return `a`. For
        antipodal endpoints (vectors within 1e-6 of opposite) the arc heads
        north from `a`, or along a fixed equatorial axis when `a` is a pole.
    """
    if fraction == 0:
        return a
    if fraction == 1:
        return b
    if a == b:
        return a

    va = to_unit_vector(a)
    vb = to_unit_vector(b)
    if (va + vb).norm() < _ANTIPODAL_EPS:
        angle = fraction * math.pi
        v = va.scaled(math.cos(angle)) + _perpendicular(va).scaled(math.sin(angle))
        return to_geo_point(v)

    # atan2 stays accurate near 0 and near a half turn
    omega = math.atan2(va.cross(vb).norm(), va.dot(vb))
    if omega == 0:
        return a
    sin_omega = math.sin(omega)
    wa = math.sin((1.0 - fraction) * omega) / sin_omega
    wb = math.sin(fraction * omega) / sin_omega
    return to_geo_point(va.scaled(wa) + vb.scaled(wb))


def initial_bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Initial course from `a` towards `b`, degrees clockwise from north [0, 360).

    Returns 0.0 for coincident points.
    """
    if a == b:
        return 0.0
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlng = math.radians(b.lng - a.lng)
    x = math.sin(dlng) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        dlng
    )
    return (math.degrees(math.atan2(x, y)) + 360.0) % 360.0
