"""
Ground observers and topocentric look angles.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from orbit.propagator import KeplerianOrbit, propagate
from utils.atmospheric import apply_refraction
from utils.coordinates import (
    compute_range_rate,
    ecef_direction_to_enu,
    ecef_to_enu,
    enu_to_az_el,
    geodetic_to_ecef,
)
from utils.frames import EcefVector, EnuVector
from utils.serialization import format_time, parse_time
from utils.timeutils import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observer:
    """
    Fixed ground site.

    Latitude and longitude are geodetic degrees, altitude is metres above
    the WGS-84 ellipsoid.
    """

    latitude: float
    longitude: float
    altitude_m: float = 0.0
    name: Optional[str] = None

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 360.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @property
    def ecef(self) -> EcefVector:
        return geodetic_to_ecef(self.latitude, self.longitude, self.altitude_m)

    def enu(self, target: EcefVector) -> EnuVector:
        """Target ECEF position relative to this observer, in ENU (km)."""
        return ecef_to_enu(target, self.ecef, self.latitude, self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "altitude_m": self.altitude_m,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Observer":
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            altitude_m=float(data.get("altitude_m", 0.0)),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class Topocentric:
    """Look angles in degrees, range in km, range rate in km/s (positive receding)."""

    time: datetime
    azimuth: float
    elevation: float
    range_km: float
    range_rate_km_s: float

    def is_above(self, min_elevation: float = 0.0) -> bool:
        return self.elevation >= min_elevation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": format_time(self.time),
            "azimuth": self.azimuth,
            "elevation": self.elevation,
            "range_km": self.range_km,
            "range_rate_km_s": self.range_rate_km_s,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topocentric":
        return cls(
            time=parse_time(data["time"]),
            azimuth=float(data["azimuth"]),
            elevation=float(data["elevation"]),
            range_km=float(data["range_km"]),
            range_rate_km_s=float(data["range_rate_km_s"]),
        )


def topocentric(orbit: KeplerianOrbit, observer: Observer, time: datetime,
                refraction: bool = False) -> Topocentric:
    """
    Azimuth, elevation, range and range rate of the satellite from an observer.

    Args:
        orbit: Satellite orbit
        observer: Ground site
        time: Evaluation time (naive values are taken as UTC)
        refraction: Report apparent (refracted) elevation instead of true

    Returns:
        Topocentric
    """
    position = propagate(orbit, time)

    enu = observer.enu(position.ecef)
    azimuth, elevation, range_km = enu_to_az_el(enu)

    # Observer is fixed in ECEF, so the ECEF satellite velocity is the relative velocity
    velocity_enu = ecef_direction_to_enu(position.ecef_velocity, observer.latitude, observer.longitude)
    range_rate = compute_range_rate(enu, velocity_enu)

    if refraction:
        elevation = apply_refraction(elevation)

    return Topocentric(
        time=position.time,
        azimuth=azimuth,
        elevation=elevation,
        range_km=range_km,
        range_rate_km_s=range_rate,
    )


def look_angles(orbit: KeplerianOrbit, observer: Observer, time: datetime,
                refraction: bool = False) -> Tuple[float, float, float]:
    """(azimuth, elevation, range_km) at ``time``."""
    result = topocentric(orbit, observer, time, refraction)
    return result.azimuth, result.elevation, result.range_km


def topocentric_now(orbit: KeplerianOrbit, observer: Observer, refraction: bool = False) -> Topocentric:
    return topocentric(orbit, observer, utc_now(), refraction)
