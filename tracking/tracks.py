"""
Ground tracks and sky tracks sampled on a fixed time grid.

Both are lazy: iterating recomputes every point, so a track can be iterated
any number of times and nothing is propagated until it is consumed.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterator, Union

from orbit.propagator import KeplerianOrbit, propagate
from utils.serialization import format_time, parse_time
from utils.timeutils import as_timedelta, ensure_utc

from .observer import Observer, topocentric


@dataclass(frozen=True)
class GroundTrackPoint:
    """Sub-satellite point on the spherical Earth; altitude in km."""

    time: datetime
    latitude: float
    longitude: float
    altitude_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": format_time(self.time),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "altitude_km": self.altitude_km,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroundTrackPoint":
        return cls(
            time=parse_time(data["time"]),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            altitude_km=float(data["altitude_km"]),
        )


@dataclass(frozen=True)
class SkyTrackPoint:
    time: datetime
    azimuth: float
    elevation: float
    range_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": format_time(self.time),
            "azimuth": self.azimuth,
            "elevation": self.elevation,
            "range_km": self.range_km,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkyTrackPoint":
        return cls(
            time=parse_time(data["time"]),
            azimuth=float(data["azimuth"]),
            elevation=float(data["elevation"]),
            range_km=float(data["range_km"]),
        )


class TimeGrid:
    """
    Inclusive, evenly spaced instants from ``start`` to ``end``.

    Instants are computed as start + i·step so rounding does not accumulate.
    """

    def __init__(self, start: datetime, end: datetime, step: Union[timedelta, float]):
        self.start = ensure_utc(start)
        self.end = ensure_utc(end)
        self.step = as_timedelta(step)

        if self.step <= timedelta(0):
            raise ValueError(f"Step must be positive, got {self.step}")
        if self.end < self.start:
            raise ValueError(f"End {self.end} is before start {self.start}")

    def __len__(self) -> int:
        return (self.end - self.start) // self.step + 1

    def __iter__(self) -> Iterator[datetime]:
        for i in range(len(self)):
            yield self.start + i * self.step


class GroundTrack:
    """Lazy sequence of GroundTrackPoint."""

    def __init__(self, orbit: KeplerianOrbit, start: datetime, end: datetime,
                 step: Union[timedelta, float]):
        self.orbit = orbit
        self.grid = TimeGrid(start, end, step)

    def __len__(self) -> int:
        return len(self.grid)

    def __iter__(self) -> Iterator[GroundTrackPoint]:
        for time in self.grid:
            geodetic = propagate(self.orbit, time).spherical_geodetic()
            yield GroundTrackPoint(time, geodetic.latitude, geodetic.longitude, geodetic.altitude)


class SkyTrack:
    """Lazy sequence of SkyTrackPoint as seen by one observer."""

    def __init__(self, orbit: KeplerianOrbit, observer: Observer, start: datetime, end: datetime,
                 step: Union[timedelta, float], refraction: bool = False):
        self.orbit = orbit
        self.observer = observer
        self.refraction = refraction
        self.grid = TimeGrid(start, end, step)

    def __len__(self) -> int:
        return len(self.grid)

    def __iter__(self) -> Iterator[SkyTrackPoint]:
        for time in self.grid:
            look = topocentric(self.orbit, self.observer, time, self.refraction)
            yield SkyTrackPoint(time, look.azimuth, look.elevation, look.range_km)


def ground_track(orbit: KeplerianOrbit, start: datetime, end: datetime,
                 step: Union[timedelta, float]) -> GroundTrack:
    """
    Sub-satellite points from ``start`` to ``end`` inclusive.

    Args:
        orbit: Satellite orbit
        start: First instant
        end: Last instant (included when it falls on the grid)
        step: Spacing as a timedelta or a number of seconds

    Raises:
        ValueError: If step is not positive or end precedes start
    """
    return GroundTrack(orbit, start, end, step)


def sky_track(orbit: KeplerianOrbit, observer: Observer, start: datetime, end: datetime,
              step: Union[timedelta, float], refraction: bool = False) -> SkyTrack:
    """Observer look angles on the same grid as ground_track()."""
    return SkyTrack(orbit, observer, start, end, step, refraction)
