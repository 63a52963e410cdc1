"""
Two-body Keplerian propagation of TLE mean elements.

No perturbations are modelled: drag terms and mean-motion derivatives in the
element set are ignored, so accuracy degrades with distance from epoch.
"""

import math
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import numpy as np

from tle.elements import OrbitalElementSet
from utils.constants import (
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
    MINUTES_PER_DAY,
    MU_EARTH,
    SECONDS_PER_DAY,
    WGS84_A,
)
from utils.coordinates import ecef_to_geodetic, eci_to_ecef, eci_velocity_to_ecef, spherical_geodetic
from utils.frames import EcefVector, EciVector, GeodeticPosition
from utils.timeutils import ensure_utc, gmst_at

from .kepler import (
    AnomalyResult,
    SingularityError,
    eccentric_anomaly,
    normalize_degrees,
    semimajor_axis_from_mean_motion,
    true_anomaly,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeplerianOrbit:
    """
    Osculating two-body orbit built from an element set.

    Angles are in degrees, mean motion in revolutions per day and the
    semi-major axis in km.
    """

    elements: OrbitalElementSet
    semimajor_axis_km: float
    eccentricity: float
    inclination: float
    raan: float
    argument_of_perigee: float
    mean_anomaly: float
    mean_motion: float
    tolerance: float = KEPLER_TOLERANCE
    max_iterations: int = KEPLER_MAX_ITERATIONS

    @classmethod
    def from_elements(cls, elements: OrbitalElementSet,
                      tolerance: float = KEPLER_TOLERANCE,
                      max_iterations: int = KEPLER_MAX_ITERATIONS) -> "KeplerianOrbit":
        """
        Derive the orbit from parsed TLE elements.

        Args:
            elements: Parsed element set
            tolerance: Kepler solver step tolerance (radians)
            max_iterations: Kepler solver iteration cap

        Returns:
            KeplerianOrbit

        Raises:
            ValueError: If mean motion is not positive
        """
        if elements.mean_motion <= 0:
            raise ValueError(f"Mean motion must be positive, got {elements.mean_motion}")

        orbit = cls(
            elements=elements,
            semimajor_axis_km=semimajor_axis_from_mean_motion(elements.mean_motion),
            eccentricity=elements.eccentricity,
            inclination=elements.inclination,
            raan=elements.raan,
            argument_of_perigee=elements.argument_of_perigee,
            mean_anomaly=elements.mean_anomaly,
            mean_motion=elements.mean_motion,
            tolerance=tolerance,
            max_iterations=max_iterations,
        )

        logger.debug(
            f"Orbit for {elements.name}: a={orbit.semimajor_axis_km:.3f} km, "
            f"period={orbit.period.total_seconds() / 60:.2f} min"
        )
        return orbit

    @property
    def name(self) -> str:
        return self.elements.name

    @property
    def epoch(self) -> datetime:
        return self.elements.epoch

    @property
    def period(self) -> timedelta:
        return timedelta(minutes=MINUTES_PER_DAY / self.mean_motion)

    @property
    def perigee_altitude_km(self) -> float:
        """Perigee height above the WGS-84 equatorial radius."""
        return self.semimajor_axis_km * (1 - self.eccentricity) - WGS84_A

    @property
    def apogee_altitude_km(self) -> float:
        return self.semimajor_axis_km * (1 + self.eccentricity) - WGS84_A

    def days_since_epoch(self, time: datetime) -> float:
        return (ensure_utc(time) - self.epoch).total_seconds() / SECONDS_PER_DAY

    def mean_anomaly_at(self, time: datetime) -> float:
        """Mean anomaly in degrees at ``time``, wrapped into [0, 360)."""
        revolutions = self.mean_motion * self.days_since_epoch(time)
        return normalize_degrees(self.mean_anomaly + 360.0 * revolutions)

    def true_anomaly_from_mean(self) -> AnomalyResult:
        """
        True anomaly at epoch.

        Never raises: if the eccentricity makes the conversion singular the
        mean anomaly is returned with ``degraded=True``.
        """
        if self.eccentricity >= 1:
            logger.warning(
                f"{self.name}: eccentricity {self.eccentricity} is not below 1; using mean anomaly as true anomaly"
            )
            return AnomalyResult.fallback(self.mean_anomaly)

        E = eccentric_anomaly(self.eccentricity, self.mean_anomaly, self.tolerance, self.max_iterations)
        return AnomalyResult.exact(true_anomaly(self.eccentricity, E))

    @property
    def true_anomaly(self) -> float:
        """Epoch true anomaly in degrees; falls back to the mean anomaly (see true_anomaly_from_mean)."""
        return self.true_anomaly_from_mean().value

    def perifocal_to_eci(self) -> np.ndarray:
        """Rotation matrix Rz(Ω)·Rx(i)·Rz(ω) from the perifocal frame to ECI."""
        raan = math.radians(self.raan)
        inc = math.radians(self.inclination)
        argp = math.radians(self.argument_of_perigee)

        cO, sO = math.cos(raan), math.sin(raan)
        ci, si = math.cos(inc), math.sin(inc)
        cw, sw = math.cos(argp), math.sin(argp)

        rz_raan = np.array([[cO, -sO, 0.0], [sO, cO, 0.0], [0.0, 0.0, 1.0]])
        rx_inc = np.array([[1.0, 0.0, 0.0], [0.0, ci, -si], [0.0, si, ci]])
        rz_argp = np.array([[cw, -sw, 0.0], [sw, cw, 0.0], [0.0, 0.0, 1.0]])

        return rz_raan @ rx_inc @ rz_argp

    def propagate(self, time: datetime) -> "Position":
        return propagate(self, time)


@dataclass(frozen=True)
class Position:
    """Propagated state at one instant. Angles in degrees, distances in km."""

    time: datetime
    mean_anomaly: float
    eccentric_anomaly: float
    true_anomaly: float
    radius_km: float
    eci: EciVector
    eci_velocity: EciVector
    ecef: EcefVector
    gmst: float

    def spherical_geodetic(self) -> GeodeticPosition:
        """Spherical-Earth sub-satellite point (mean radius 6371 km)."""
        return spherical_geodetic(self.ecef)

    def wgs84_geodetic(self) -> GeodeticPosition:
        return ecef_to_geodetic(self.ecef)

    @property
    def ecef_velocity(self) -> EcefVector:
        return eci_velocity_to_ecef(self.eci, self.eci_velocity, self.gmst)


def propagate(orbit: KeplerianOrbit, time: datetime) -> Position:
    """
    Propagate an orbit to ``time``.

    1. Mean anomaly advanced by n·Δt and wrapped to [0, 360)
    2. Kepler's equation solved for the eccentric anomaly
    3. True anomaly and radius r = a(1 - e·cos E)
    4. Perifocal position and velocity rotated into ECI
    5. ECI rotated into ECEF by GMST

    Args:
        orbit: Orbit to propagate
        time: Target time (naive values are taken as UTC)

    Returns:
        Position

    Raises:
        SingularityError: If the eccentricity is 1 or more
    """
    e = orbit.eccentricity
    if e >= 1:
        raise SingularityError(e)

    time = ensure_utc(time)
    a = orbit.semimajor_axis_km

    M = orbit.mean_anomaly_at(time)
    E = eccentric_anomaly(e, M, orbit.tolerance, orbit.max_iterations)
    nu = true_anomaly(e, E)
    r = a * (1 - e * math.cos(math.radians(E)))

    nu_rad = math.radians(nu)
    p = a * (1 - e * e)
    speed = math.sqrt(MU_EARTH / p)
    r_pqw = np.array([r * math.cos(nu_rad), r * math.sin(nu_rad), 0.0])
    v_pqw = np.array([-speed * math.sin(nu_rad), speed * (e + math.cos(nu_rad)), 0.0])

    Q = orbit.perifocal_to_eci()
    eci = EciVector.from_array(Q @ r_pqw)
    eci_velocity = EciVector.from_array(Q @ v_pqw)

    theta = gmst_at(time)
    ecef = eci_to_ecef(eci, theta)

    return Position(
        time=time,
        mean_anomaly=M,
        eccentric_anomaly=E,
        true_anomaly=nu,
        radius_km=r,
        eci=eci,
        eci_velocity=eci_velocity,
        ecef=ecef,
        gmst=theta,
    )
