"""
Coordinate transformation functions.
Supports: Geodetic (LLA) ↔ ECEF, ECI ↔ ECEF (position and velocity),
ECEF → ENU, ENU → azimuth/elevation/range.

All distances are in kilometres; observer altitudes are given in metres.
"""

import math
from typing import Tuple

import numpy as np

from .constants import EARTH_MEAN_RADIUS, EARTH_ROTATION_RATE, WGS84_A, WGS84_E2
from .frames import (
    EcefVector,
    EciVector,
    EnuVector,
    GeodeticPosition,
    require_frame,
)


def rotation_z(angle: float) -> np.ndarray:
    """Passive rotation matrix about the Z axis by ``angle`` radians."""
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [c, s, 0.0],
        [-s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def geodetic_to_ecef(lat: float, lon: float, alt_m: float) -> EcefVector:
    """
    Convert geodetic coordinates (latitude, longitude, altitude) to ECEF.

    Exact conversion on the WGS-84 ellipsoid.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        alt_m: Altitude above ellipsoid in meters

    Returns:
        ECEF position (km)
    """
    lat_rad = np.radians(lat)
    lon_rad = np.radians(lon)
    alt = alt_m / 1000.0

    # Radius of curvature in prime vertical
    N = WGS84_A / np.sqrt(1 - WGS84_E2 * np.sin(lat_rad) ** 2)

    x = (N + alt) * np.cos(lat_rad) * np.cos(lon_rad)
    y = (N + alt) * np.cos(lat_rad) * np.sin(lon_rad)
    z = (N * (1 - WGS84_E2) + alt) * np.sin(lat_rad)

    return EcefVector.from_array([x, y, z])


def ecef_to_geodetic(ecef: EcefVector, iterations: int = 10) -> GeodeticPosition:
    """
    Convert ECEF coordinates to geodetic (latitude, longitude, altitude).
    Uses iterative method (Bowring's formula) on the WGS-84 ellipsoid.

    Args:
        ecef: ECEF position (km)
        iterations: Number of latitude refinement passes

    Returns:
        GeodeticPosition with altitude in km
    """
    require_frame(ecef, EcefVector)
    x, y, z = ecef.x, ecef.y, ecef.z

    lon = np.arctan2(y, x)

    # Distance from Z-axis
    p = np.sqrt(x**2 + y**2)

    # Initial latitude estimate
    lat = np.arctan2(z, p * (1 - WGS84_E2))

    for _ in range(iterations):
        N = WGS84_A / np.sqrt(1 - WGS84_E2 * np.sin(lat) ** 2)
        lat = np.arctan2(z + WGS84_E2 * N * np.sin(lat), p)

    N = WGS84_A / np.sqrt(1 - WGS84_E2 * np.sin(lat) ** 2)
    if abs(np.cos(lat)) > 1e-10:
        alt = p / np.cos(lat) - N
    else:
        # At the poles use the polar form
        alt = abs(z) - N * (1 - WGS84_E2)

    return GeodeticPosition(float(np.degrees(lat)), float(np.degrees(lon)), float(alt))


def spherical_geodetic(ecef: EcefVector) -> GeodeticPosition:
    """
    Spherical-Earth latitude/longitude/altitude of an ECEF position.

    This is the approximation reported by the propagator:
        latitude  = 90° - acos(z / |r|)
        longitude = atan2(y, x)
        altitude  = |r| - mean Earth radius

    It differs from ecef_to_geodetic() by up to ~0.2° in latitude and
    ~20 km in altitude. Use ecef_to_geodetic() when WGS-84 accuracy matters.
    """
    require_frame(ecef, EcefVector)
    r = ecef.magnitude
    latitude = 90.0 - math.degrees(math.acos(ecef.z / r))
    longitude = math.degrees(math.atan2(ecef.y, ecef.x))
    return GeodeticPosition(latitude, longitude, r - EARTH_MEAN_RADIUS)


def eci_to_ecef(pos: EciVector, gmst: float) -> EcefVector:
    """
    Rotate an ECI position into ECEF about Z by -GMST.

        X_ecef =  cos(θ)·X_eci + sin(θ)·Y_eci
        Y_ecef = -sin(θ)·X_eci + cos(θ)·Y_eci
        Z_ecef =  Z_eci

    Args:
        pos: ECI position (km)
        gmst: Greenwich Mean Sidereal Time (rad)

    Returns:
        ECEF position (km)
    """
    require_frame(pos, EciVector)
    return EcefVector.from_array(rotation_z(gmst) @ pos.as_array())


def ecef_to_eci(pos: EcefVector, gmst: float) -> EciVector:
    """Inverse of eci_to_ecef()."""
    require_frame(pos, EcefVector)
    return EciVector.from_array(rotation_z(-gmst) @ pos.as_array())


def eci_velocity_to_ecef(pos: EciVector, vel: EciVector, gmst: float) -> EcefVector:
    """
    Transform an ECI velocity into ECEF.

    V_ecef = R(θ)·V_eci - ω × (R(θ)·R_eci), with ω along +Z.

    Args:
        pos: ECI position (km)
        vel: ECI velocity (km/s)
        gmst: Greenwich Mean Sidereal Time (rad)

    Returns:
        ECEF velocity (km/s)
    """
    require_frame(pos, EciVector)
    require_frame(vel, EciVector)

    R = rotation_z(gmst)
    r_ecef = R @ pos.as_array()
    v_rot = R @ vel.as_array()

    omega = np.array([0.0, 0.0, EARTH_ROTATION_RATE])
    return EcefVector.from_array(v_rot - np.cross(omega, r_ecef))


def enu_rotation(lat: float, lon: float) -> np.ndarray:
    """Rotation matrix from ECEF to ENU at the given geodetic lat/lon (degrees)."""
    lat_rad = np.radians(lat)
    lon_rad = np.radians(lon)

    return np.array([
        [-np.sin(lon_rad),                    np.cos(lon_rad),                    0.0            ],
        [-np.sin(lat_rad) * np.cos(lon_rad), -np.sin(lat_rad) * np.sin(lon_rad),  np.cos(lat_rad)],
        [ np.cos(lat_rad) * np.cos(lon_rad),  np.cos(lat_rad) * np.sin(lon_rad),  np.sin(lat_rad)],
    ])


def ecef_to_enu(pos: EcefVector, observer_ecef: EcefVector,
                observer_lat: float, observer_lon: float) -> EnuVector:
    """
    Express a target ECEF position in an observer's East-North-Up frame.

    Args:
        pos: Target position in ECEF (km)
        observer_ecef: Observer position in ECEF (km)
        observer_lat: Observer geodetic latitude (degrees)
        observer_lon: Observer geodetic longitude (degrees)

    Returns:
        Observer-relative vector in ENU (km)
    """
    require_frame(pos, EcefVector)
    rel = pos.subtract(observer_ecef)
    return EnuVector.from_array(enu_rotation(observer_lat, observer_lon) @ rel.as_array())


def ecef_direction_to_enu(vec: EcefVector, observer_lat: float, observer_lon: float) -> EnuVector:
    """Rotate a free ECEF vector (e.g. a velocity) into ENU without translating it."""
    require_frame(vec, EcefVector)
    return EnuVector.from_array(enu_rotation(observer_lat, observer_lon) @ vec.as_array())


def enu_to_az_el(enu: EnuVector) -> Tuple[float, float, float]:
    """
    Compute azimuth, elevation and range from an ENU vector.

    Args:
        enu: Observer-relative vector in ENU (km)

    Returns:
        (azimuth, elevation, range): degrees, degrees, km.
        Azimuth is clockwise from north in [0, 360).
    """
    require_frame(enu, EnuVector)

    range_km = enu.magnitude
    range_horizontal = math.sqrt(enu.east**2 + enu.north**2)
    elevation = math.degrees(math.atan2(enu.up, range_horizontal))
    azimuth = math.degrees(math.atan2(enu.east, enu.north)) % 360.0
    # -0.0 % 360 and tiny negatives can round up to 360.0
    if azimuth >= 360.0:
        azimuth -= 360.0

    return azimuth, elevation, range_km


def compute_range_rate(enu: EnuVector, rel_velocity_enu: EnuVector) -> float:
    """
    Rate of change of slant range (km/s); positive when receding.

    Args:
        enu: Observer-to-target vector (km)
        rel_velocity_enu: Target velocity relative to the observer, ENU (km/s)
    """
    range_km = enu.magnitude
    if range_km == 0:
        return 0.0
    return enu.dot(rel_velocity_enu) / range_km
