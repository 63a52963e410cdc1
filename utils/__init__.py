"""
Utility functions for coordinate transforms, time scales, configuration and logging.
"""

from .frames import FrameError, Vector3D, EciVector, EcefVector, EnuVector, GeodeticPosition
from .coordinates import (
    geodetic_to_ecef, ecef_to_geodetic, spherical_geodetic,
    eci_to_ecef, ecef_to_eci, eci_velocity_to_ecef,
    ecef_to_enu, enu_to_az_el,
)
from .atmospheric import apply_refraction
from .timeutils import julian_date, julian_date_from_epoch, gmst, gmst_at, expand_two_digit_year
from .config import Settings
from .logging_config import setup_logging

__all__ = [
    'FrameError', 'Vector3D', 'EciVector', 'EcefVector', 'EnuVector', 'GeodeticPosition',
    'geodetic_to_ecef', 'ecef_to_geodetic', 'spherical_geodetic',
    'eci_to_ecef', 'ecef_to_eci', 'eci_velocity_to_ecef',
    'ecef_to_enu', 'enu_to_az_el',
    'apply_refraction',
    'julian_date', 'julian_date_from_epoch', 'gmst', 'gmst_at', 'expand_two_digit_year',
    'Settings',
    'setup_logging',
]
