"""
Physical and numerical constants shared by the propagator and transforms.

Earth figure values follow WGS-84; distances are in kilometres unless the
name says otherwise.
"""

import math

# Earth gravitational parameter (km^3/s^2), WGS-84
MU_EARTH = 398600.4418

# WGS84 ellipsoid parameters
WGS84_A = 6378.137  # Semi-major axis (km)
WGS84_F = 1.0 / 298.257223563  # Flattening
WGS84_E2 = 2 * WGS84_F - WGS84_F ** 2  # Eccentricity squared
WGS84_B = WGS84_A * (1.0 - WGS84_F)  # Semi-minor axis (km)

# Spherical Earth used by the propagator's latitude/altitude approximation
EARTH_MEAN_RADIUS = 6371.0

# Earth rotation rate (rad/s)
EARTH_ROTATION_RATE = 7.292115855e-5

SECONDS_PER_DAY = 86400.0
MINUTES_PER_DAY = 1440.0
DAYS_PER_JULIAN_CENTURY = 36525.0

# Julian dates of reference epochs
JD_UNIX_EPOCH = 2440587.5  # 1970-01-01 00:00 UTC
JD_J2000 = 2451545.0  # 2000-01-01 12:00

TWO_PI = 2.0 * math.pi

# Kepler solver defaults
KEPLER_TOLERANCE = 1e-5
KEPLER_MAX_ITERATIONS = 500
