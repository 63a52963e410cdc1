"""
Atmospheric refraction correction for look angles.

Refraction lifts the apparent position of a satellite near the horizon by up
to about half a degree.
"""

import numpy as np
import logging

logger = logging.getLogger(__name__)

# Below this true elevation the correction is not applied
REFRACTION_CUTOFF_DEG = -1.0


def refraction_correction(elevation_deg: float) -> float:
    """
    Bennett's refraction for a true elevation angle.

        R(arcmin) = 1 / tan(el + 7.31 / (el + 4.4))

    Bennett's argument passes 90° just below the zenith (el ≈ 89.92°),
    where the formula turns negative; there the near-zenith form
    R = 1 / tan(el) is used instead so the correction stays positive.

    Args:
        elevation_deg: True (geometric) elevation in degrees

    Returns:
        Correction in arc minutes; 0 when elevation_deg <= -1°
    """
    if elevation_deg <= REFRACTION_CUTOFF_DEG:
        return 0.0

    argument = elevation_deg + 7.31 / (elevation_deg + 4.4)
    if argument >= 90.0:
        argument = elevation_deg

    return float(1.0 / np.tan(np.radians(argument)))


def apply_refraction(elevation_deg: float) -> float:
    """
    Convert a true elevation into the apparent (refracted) elevation.

    Uses standard atmospheric conditions (10°C, 1010 hPa). Elevations at or
    below -1° are returned unchanged.

    Args:
        elevation_deg: True elevation in degrees

    Returns:
        Apparent elevation in degrees
    """
    correction_arcmin = refraction_correction(elevation_deg)
    apparent = elevation_deg + correction_arcmin / 60.0

    logger.debug(f"Refraction: {correction_arcmin:.3f}' (elev={elevation_deg:.2f}°)")

    return apparent
