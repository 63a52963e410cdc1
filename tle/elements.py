"""
Orbital element set decoded from a TLE record.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict

from utils.timeutils import epoch_to_datetime, julian_date_from_epoch


@dataclass(frozen=True)
class OrbitalElementSet:
    """
    Immutable mean elements at epoch, as published in a TLE.

    Angles are in degrees and mean motion in revolutions per day. The
    mean-motion derivatives and B* drag term are kept for completeness but
    play no part in two-body propagation.
    """

    name: str
    catalog_number: int
    classification: str
    international_designator: str
    epoch_year: int
    epoch_day: float
    mean_motion_dot: float
    mean_motion_ddot: float
    bstar: float
    element_set_number: int
    inclination: float
    raan: float
    eccentricity: float
    argument_of_perigee: float
    mean_anomaly: float
    mean_motion: float
    revolutions_at_epoch: int

    @property
    def epoch(self) -> datetime:
        """Epoch as an aware UTC datetime."""
        return epoch_to_datetime(self.epoch_year, self.epoch_day)

    @property
    def epoch_julian_date(self) -> float:
        return julian_date_from_epoch(self.epoch_year, self.epoch_day)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
