"""
Kepler's equation and anomaly conversions for elliptical orbits.

Mean anomaly M grows linearly with time; eccentric anomaly E solves
E - e·sin(E) = M; true anomaly ν is the geometric angle from perigee.
"""

import math
import logging
from dataclasses import dataclass

from utils.constants import (
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
    MU_EARTH,
    SECONDS_PER_DAY,
    TWO_PI,
)

logger = logging.getLogger(__name__)


class SingularityError(ArithmeticError):
    """Eccentricity >= 1: the elliptical anomaly relations break down."""

    def __init__(self, eccentricity: float):
        self.eccentricity = eccentricity
        super().__init__(f"Reached singularity: eccentricity {eccentricity} is not below 1")


@dataclass(frozen=True)
class AnomalyResult:
    """
    An anomaly value tagged with how it was obtained.

    ``degraded`` is True when the true anomaly could not be computed and the
    mean anomaly was substituted.
    """

    value: float
    degraded: bool = False

    @classmethod
    def exact(cls, value: float) -> "AnomalyResult":
        return cls(value, False)

    @classmethod
    def fallback(cls, mean_anomaly: float) -> "AnomalyResult":
        return cls(mean_anomaly, True)


def normalize_degrees(angle: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = angle % 360.0
    if wrapped >= 360.0:
        wrapped -= 360.0
    return wrapped


def semimajor_axis_from_mean_motion(mean_motion: float) -> float:
    """
    Semi-major axis from mean motion via Kepler's third law, a³ = μ / n².

    Args:
        mean_motion: Revolutions per day

    Returns:
        Semi-major axis in km
    """
    n = mean_motion * TWO_PI / SECONDS_PER_DAY
    return (MU_EARTH / n ** 2) ** (1.0 / 3.0)


def mean_motion_from_semimajor_axis(semimajor_axis_km: float) -> float:
    """Inverse of semimajor_axis_from_mean_motion(); returns revolutions per day."""
    n = math.sqrt(MU_EARTH / semimajor_axis_km ** 3)
    return n * SECONDS_PER_DAY / TWO_PI


def solve_kepler(mean_anomaly: float, eccentricity: float,
                 tolerance: float = KEPLER_TOLERANCE,
                 max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
    """
    Solve E - e·sin(E) = M for E with Newton-Raphson.

    Starts from M + e/2 (M < π) or M - e/2 and stops once the Newton step
    |f/f'| is within ``tolerance`` or after ``max_iterations`` steps. There is
    no convergence guarantee beyond the cap; for e close to 1 the last
    iterate is returned as-is.

    Args:
        mean_anomaly: M in radians
        eccentricity: e in [0, 1)
        tolerance: Step size at which iteration stops (radians)
        max_iterations: Iteration cap

    Returns:
        Eccentric anomaly E in radians
    """
    E = mean_anomaly + eccentricity / 2 if mean_anomaly < math.pi else mean_anomaly - eccentricity / 2

    for _ in range(max_iterations):
        f = E - eccentricity * math.sin(E) - mean_anomaly
        f_prime = 1 - eccentricity * math.cos(E)
        ratio = f / f_prime
        E -= ratio
        if abs(ratio) <= tolerance:
            break
    else:
        logger.debug(
            f"Kepler solver hit {max_iterations} iterations (e={eccentricity}, M={mean_anomaly:.6f}, last step={ratio:.3e})"
        )

    return E


def eccentric_anomaly(eccentricity: float, mean_anomaly_deg: float,
                      tolerance: float = KEPLER_TOLERANCE,
                      max_iterations: int = KEPLER_MAX_ITERATIONS) -> float:
    """Degree wrapper around solve_kepler()."""
    E = solve_kepler(math.radians(mean_anomaly_deg), eccentricity, tolerance, max_iterations)
    return math.degrees(E)


def true_anomaly(eccentricity: float, eccentric_anomaly_deg: float) -> float:
    """
    True anomaly from eccentric anomaly.

        ν = 2·atan2(√(1+e)·sin(E/2), √(1-e)·cos(E/2))

    Args:
        eccentricity: e, must be below 1
        eccentric_anomaly_deg: E in degrees

    Returns:
        ν in degrees, wrapped into [0, 360)

    Raises:
        SingularityError: If eccentricity >= 1
    """
    if eccentricity >= 1:
        raise SingularityError(eccentricity)

    half_E = math.radians(eccentric_anomaly_deg) / 2.0
    nu = 2.0 * math.atan2(
        math.sqrt(1 + eccentricity) * math.sin(half_E),
        math.sqrt(1 - eccentricity) * math.cos(half_E),
    )
    return normalize_degrees(math.degrees(nu))
