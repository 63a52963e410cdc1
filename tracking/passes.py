"""
Pass prediction: when a satellite rises above and sets below an elevation mask.

The search scans elevation on a fixed time grid, brackets each horizon
crossing between two samples and refines it with bisection. The culmination
is the highest sample, polished with a bounded scalar minimisation.

Limitations:
    - A pass that rises and sets entirely between two samples is missed;
      keep the step well below the shortest pass of interest.
    - A pass already in progress at ``start`` or still in progress at ``end``
      is not reported.
"""

import math
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from scipy.optimize import bisect, minimize_scalar

from orbit.propagator import KeplerianOrbit
from utils.serialization import format_time, parse_time
from utils.timeutils import ensure_utc, offset, seconds_between

from .observer import Observer, topocentric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PassSearchSettings:
    """
    Tuning for predict_passes().

    Attributes:
        step_seconds: Scan grid spacing
        tolerance_seconds: Bisection tolerance on AOS/LOS times
        apply_refraction: Compare refracted (apparent) elevation against the mask
    """

    step_seconds: float = 30.0
    tolerance_seconds: float = 0.1
    apply_refraction: bool = False

    def __post_init__(self):
        if self.step_seconds <= 0:
            raise ValueError(f"step_seconds must be positive, got {self.step_seconds}")
        if self.tolerance_seconds <= 0:
            raise ValueError(f"tolerance_seconds must be positive, got {self.tolerance_seconds}")


@dataclass(frozen=True)
class PassPoint:
    time: datetime
    azimuth: float

    def to_dict(self) -> Dict[str, Any]:
        return {"time": format_time(self.time), "azimuth": self.azimuth}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassPoint":
        return cls(time=parse_time(data["time"]), azimuth=float(data["azimuth"]))


@dataclass(frozen=True)
class PassPeak:
    time: datetime
    elevation: float
    azimuth: float

    def to_dict(self) -> Dict[str, Any]:
        return {"time": format_time(self.time), "elevation": self.elevation, "azimuth": self.azimuth}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassPeak":
        return cls(
            time=parse_time(data["time"]),
            elevation=float(data["elevation"]),
            azimuth=float(data["azimuth"]),
        )


@dataclass(frozen=True)
class PassWindow:
    """One pass: acquisition (AOS), culmination and loss of signal (LOS)."""

    aos: PassPoint
    max: PassPeak
    los: PassPoint

    @property
    def duration(self) -> timedelta:
        return self.los.time - self.aos.time

    @property
    def duration_seconds(self) -> float:
        return self.duration.total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {"aos": self.aos.to_dict(), "max": self.max.to_dict(), "los": self.los.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassWindow":
        return cls(
            aos=PassPoint.from_dict(data["aos"]),
            max=PassPeak.from_dict(data["max"]),
            los=PassPoint.from_dict(data["los"]),
        )


@dataclass
class _ElevationModel:
    """Elevation as a function of seconds after ``start``."""

    orbit: KeplerianOrbit
    observer: Observer
    start: datetime
    refraction: bool
    evaluations: int = field(default=0)

    def look(self, seconds: float):
        self.evaluations += 1
        return topocentric(self.orbit, self.observer, offset(self.start, seconds), self.refraction)

    def elevation(self, seconds: float) -> float:
        return self.look(seconds).elevation


def _sample_offsets(total_seconds: float, step: float) -> List[float]:
    count = int(math.floor(total_seconds / step))
    offsets = [i * step for i in range(count + 1)]
    if offsets[-1] < total_seconds:
        offsets.append(total_seconds)
    return offsets


def _crossing(f: Callable[[float], float], a: float, b: float, fa: float, fb: float, xtol: float) -> float:
    """Root of ``f`` in [a, b], where fa and fb bracket zero."""
    if fa == 0:
        return a
    if fb == 0:
        return b
    return bisect(f, a, b, xtol=xtol)


def _refine_peak(model: _ElevationModel, best_s: float, best_el: float,
                 lower: float, upper: float, xtol: float):
    """Polish the highest sample; keep the sample if the optimiser does no better."""
    if upper - lower <= xtol:
        return best_s, best_el

    result = minimize_scalar(
        lambda s: -model.elevation(s),
        bounds=(lower, upper),
        method="bounded",
        options={"xatol": xtol},
    )
    if result.success and -result.fun > best_el:
        return float(result.x), float(-result.fun)
    return best_s, best_el


def predict_passes(orbit: KeplerianOrbit, observer: Observer, start: datetime, end: datetime,
                   min_elevation: float = 0.0,
                   settings: PassSearchSettings = PassSearchSettings()) -> List[PassWindow]:
    """
    Find every complete pass in [start, end].

    A pass opens at the first grid sample at or above ``min_elevation`` and
    closes at the first sample below it; both edges are then bisected on the
    same elevation model (refracted or not), so the reported culmination is
    never below the mask.

    Args:
        orbit: Satellite orbit
        observer: Ground site
        start: Search window start (naive values are taken as UTC)
        end: Search window end
        min_elevation: Elevation mask in degrees
        settings: Step, tolerance and refraction options

    Returns:
        Passes in chronological order

    Raises:
        ValueError: If end precedes start
    """
    start = ensure_utc(start)
    end = ensure_utc(end)
    if end < start:
        raise ValueError(f"End {end} is before start {start}")

    model = _ElevationModel(orbit, observer, start, settings.apply_refraction)
    tol = settings.tolerance_seconds
    step = settings.step_seconds

    def above_mask(seconds: float) -> float:
        return model.elevation(seconds) - min_elevation

    offsets = _sample_offsets(seconds_between(start, end), step)

    passes: List[PassWindow] = []
    prev_s = offsets[0]
    prev_f = above_mask(prev_s)
    if prev_f >= 0:
        logger.debug(f"{orbit.name} already above {min_elevation}° at {start}, skipping partial pass")

    in_pass = False
    aos_s = best_s = best_el = 0.0

    for s in offsets[1:]:
        f = above_mask(s)

        if f >= 0 and prev_f < 0:
            aos_s = _crossing(above_mask, prev_s, s, prev_f, f, tol)
            best_s, best_el = s, f + min_elevation
            in_pass = True
        elif f >= 0 and in_pass:
            if f + min_elevation > best_el:
                best_s, best_el = s, f + min_elevation
        elif f < 0 and prev_f >= 0 and in_pass:
            los_s = _crossing(above_mask, prev_s, s, prev_f, f, tol)
            window = _build_window(model, aos_s, best_s, best_el, los_s, step, tol, min_elevation)
            if window is not None:
                passes.append(window)
            in_pass = False

        prev_s, prev_f = s, f

    if in_pass:
        logger.debug(f"{orbit.name} pass starting {offset(start, aos_s)} still open at {end}, skipped")

    logger.info(
        f"Found {len(passes)} passes for {orbit.name} between {start} and {end} "
        f"({model.evaluations} evaluations)"
    )
    return passes


def _build_window(model: _ElevationModel, aos_s: float, best_s: float, best_el: float,
                  los_s: float, step: float, tol: float, min_elevation: float) -> Optional[PassWindow]:
    """
    Assemble a PassWindow, or None for a grazing touch of the mask.

    The culmination always lies strictly between AOS and LOS. When a sample
    lands exactly on the mask the highest sample can coincide with AOS; the
    peak then moves to the midpoint of the pass, which must still clear the mask.
    """
    if los_s <= aos_s:
        logger.debug(f"Zero-length touch of {min_elevation}° at +{aos_s:.1f}s, skipped")
        return None

    lower = max(aos_s, best_s - step)
    upper = min(los_s, best_s + step)
    peak_s, peak_el = _refine_peak(model, best_s, best_el, lower, upper, tol)

    if not aos_s < peak_s < los_s:
        peak_s = (aos_s + los_s) / 2
        peak_el = model.elevation(peak_s)
        if peak_el < min_elevation:
            logger.debug(f"Grazing pass at +{aos_s:.1f}s never clears {min_elevation}°, skipped")
            return None

    aos_look = model.look(aos_s)
    peak_look = model.look(peak_s)
    los_look = model.look(los_s)

    window = PassWindow(
        aos=PassPoint(aos_look.time, aos_look.azimuth),
        max=PassPeak(peak_look.time, peak_el, peak_look.azimuth),
        los=PassPoint(los_look.time, los_look.azimuth),
    )
    logger.debug(
        f"Pass AOS {window.aos.time} az {window.aos.azimuth:.1f}°, "
        f"max {window.max.elevation:.1f}° at {window.max.time}, LOS {window.los.time}"
    )
    return window


def next_pass(orbit: KeplerianOrbit, observer: Observer, start: datetime,
              horizon: timedelta = timedelta(days=2), min_elevation: float = 0.0,
              settings: PassSearchSettings = PassSearchSettings()) -> Optional[PassWindow]:
    """
    First complete pass beginning after ``start``.

    Args:
        horizon: How far ahead to search

    Returns:
        PassWindow, or None if nothing rises within the horizon
    """
    start = ensure_utc(start)
    passes = predict_passes(orbit, observer, start, start + horizon, min_elevation, settings)
    return passes[0] if passes else None
