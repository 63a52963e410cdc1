"""
Julian date and sidereal time helpers.

All datetimes are treated as UTC. Naive datetimes are assumed to already be
in UTC; aware datetimes are converted.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Union

from .constants import (
    DAYS_PER_JULIAN_CENTURY,
    JD_J2000,
    JD_UNIX_EPOCH,
    SECONDS_PER_DAY,
    TWO_PI,
)


_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as a timezone-aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current wall-clock time. Only boundary helpers should call this."""
    return datetime.now(timezone.utc)


def julian_date(dt: datetime) -> float:
    """
    Convert a datetime to a Julian Date.

    Args:
        dt: UTC datetime (naive values are taken as UTC)

    Returns:
        Julian Date in days
    """
    seconds = (ensure_utc(dt) - _UNIX_EPOCH).total_seconds()
    return JD_UNIX_EPOCH + seconds / SECONDS_PER_DAY


def datetime_from_julian(jd: float) -> datetime:
    """Convert a Julian Date back to an aware UTC datetime (microsecond resolution)."""
    return _UNIX_EPOCH + timedelta(days=jd - JD_UNIX_EPOCH)


def epoch_to_datetime(epoch_year: int, epoch_day: float) -> datetime:
    """
    Convert a TLE epoch (4-digit year, fractional day-of-year) to UTC.

    Day 1.0 is January 1st at 00:00 UTC.
    """
    return datetime(epoch_year, 1, 1, tzinfo=timezone.utc) + timedelta(days=epoch_day - 1.0)


def julian_date_from_epoch(epoch_year: int, epoch_day: float) -> float:
    """
    Julian Date of a TLE epoch.

    Args:
        epoch_year: Four-digit year
        epoch_day: Fractional day of year (1.0 = Jan 1 00:00 UTC)

    Returns:
        Julian Date in days
    """
    jan1 = datetime(epoch_year, 1, 1, tzinfo=timezone.utc)
    return julian_date(jan1) + (epoch_day - 1.0)


def julian_centuries(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (jd - JD_J2000) / DAYS_PER_JULIAN_CENTURY


def gmst(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time for a Julian Date.

    Uses the IAU-82 polynomial in Julian centuries T since J2000.0:
        GMST(s) = 67310.54841 + (876600h + 8640184.812866) T
                  + 0.093104 T^2 - 6.2e-6 T^3

    Args:
        jd: Julian Date (UTC used as an approximation of UT1)

    Returns:
        GMST in radians, normalized to [0, 2π)
    """
    t = julian_centuries(jd)
    seconds = (
        67310.54841
        + (876600.0 * 3600.0 + 8640184.812866) * t
        + 0.093104 * t ** 2
        - 6.2e-6 * t ** 3
    )
    # 240 seconds of sidereal time per degree
    theta = math.radians(seconds / 240.0) % TWO_PI
    if theta < 0:
        theta += TWO_PI
    return theta


def gmst_at(dt: datetime) -> float:
    """GMST in radians for a datetime."""
    return gmst(julian_date(dt))


def expand_two_digit_year(two_digit_year: int, reference_year: int) -> int:
    """
    Expand a 2-digit TLE epoch year with a sliding ±50 year window.

    The century is taken from ``reference_year``; the result is moved by a
    century when it lands more than 50 years away from the reference. The
    outcome therefore depends on the reference year supplied by the caller.

    Examples (reference 2025): 20 -> 2020, 57 -> 2057, 99 -> 1999.

    Args:
        two_digit_year: Value 0-99 from the TLE
        reference_year: Four-digit year the window is centred on

    Returns:
        Four-digit year
    """
    century = (reference_year // 100) * 100
    year = century + two_digit_year

    if year > reference_year + 50:
        year -= 100
    elif year < reference_year - 50:
        year += 100

    return year


def as_timedelta(step: Union[timedelta, float]) -> timedelta:
    """Accept a ``timedelta`` or a number of seconds."""
    if isinstance(step, timedelta):
        return step
    return timedelta(seconds=float(step))


def seconds_between(start: datetime, end: datetime) -> float:
    return (ensure_utc(end) - ensure_utc(start)).total_seconds()


def offset(start: datetime, seconds: float) -> datetime:
    """``start`` shifted by ``seconds`` (microsecond resolution)."""
    return ensure_utc(start) + timedelta(seconds=seconds)
