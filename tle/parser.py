"""
Two-Line Element (TLE) parsing.

A record is three lines: the object name followed by NORAD lines 1 and 2.

    ISS (ZARYA)
    1 25544U 98067A   20097.82871450  .00000874  00000-0  24271-4 0  9992
    2 25544  51.6465 341.5807 0003880  94.4223  26.1197 15.48685836220958

Fields are read from fixed columns; column positions below are 0-indexed and
inclusive.
"""

import re
import logging
from typing import List, Tuple

from utils.timeutils import expand_two_digit_year, utc_now

from .elements import OrbitalElementSet
from .errors import (
    InvalidChecksumError,
    InvalidEccentricityError,
    InvalidFormatError,
    InvalidNumberError,
    MissingLinesError,
)

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69
NAME_WIDTH = 24

_DIGITS = "0123456789"
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")
# ±XXXXX±Y with an implied decimal point before the mantissa
_EXP_RE = re.compile(r"^([+-]?)(\d{5})([+-]\d)$")

# (field, start, end)
LINE1_FIELDS = {
    "catalog_number": (2, 6),
    "classification": (7, 7),
    "international_designator": (9, 16),
    "epoch_year": (18, 19),
    "epoch_day": (20, 31),
    "mean_motion_dot": (33, 42),
    "mean_motion_ddot": (44, 51),
    "bstar": (53, 60),
    "element_set_number": (64, 67),
}

LINE2_FIELDS = {
    "inclination": (8, 15),
    "raan": (17, 24),
    "eccentricity": (26, 32),
    "argument_of_perigee": (34, 41),
    "mean_anomaly": (43, 50),
    "mean_motion": (52, 62),
    "revolutions_at_epoch": (63, 67),
}


def compute_checksum(line: str) -> int:
    """
    Modulo-10 checksum of columns 1-68.

    Digits count at face value, '-' counts as 1, everything else (letters,
    spaces, '.', '+') is ignored.
    """
    total = 0
    for char in line[:TLE_LINE_LENGTH - 1]:
        if char in _DIGITS:
            total += ord(char) - ord("0")
        elif char == "-":
            total += 1
    return total % 10


def validate_checksum(line: str, line_number: int) -> None:
    """
    Check the digit in column 69 against compute_checksum().

    Raises:
        InvalidFormatError: If the line is short or column 69 is not a digit
        InvalidChecksumError: If the checksum does not match
    """
    if len(line) < TLE_LINE_LENGTH:
        raise InvalidFormatError(f"Line {line_number} is too short for checksum validation")

    checksum_char = line[TLE_LINE_LENGTH - 1]
    if checksum_char not in _DIGITS:
        raise InvalidFormatError(f"Line {line_number} checksum character is not a digit: {checksum_char!r}")

    expected = int(checksum_char)
    actual = compute_checksum(line)
    if expected != actual:
        raise InvalidChecksumError(line=line_number, expected=expected, actual=actual)


def parse_tle_exponent(raw: str, field: str) -> float:
    """
    Decode TLE compact scientific notation.

        "24271-4"  ->  0.24271e-4
        "-11606-4" -> -0.11606e-4
        "00000-0"  ->  0.0 (blank also decodes to 0.0)

    Raises:
        InvalidNumberError: If the field does not match ±XXXXX±Y (exactly five mantissa digits)
    """
    value = raw.strip()
    if not value:
        return 0.0

    match = _EXP_RE.match(value)
    if not match:
        raise InvalidNumberError(field, raw)

    sign, mantissa, exponent = match.groups()
    if not mantissa.strip("0"):
        return 0.0

    result = float("0." + mantissa) * 10.0 ** int(exponent)
    return -result if sign == "-" else result


def validate_eccentricity(value: float) -> float:
    """Return ``value`` if it lies in [0, 1), else raise InvalidEccentricityError."""
    if not 0.0 <= value < 1.0:
        raise InvalidEccentricityError(value)
    return value


def _split_lines(text: str) -> List[str]:
    # Accept CRLF and a trailing line terminator; nothing else is forgiven.
    return [line.rstrip("\r") for line in text.rstrip("\r\n").split("\n")]


def _column(line: str, span: Tuple[int, int]) -> str:
    start, end = span
    return line[start:end + 1]


def _to_int(raw: str, field: str) -> int:
    value = raw.strip()
    if not _INT_RE.match(value):
        raise InvalidNumberError(field, raw)
    return int(value)


def _to_float(raw: str, field: str) -> float:
    value = raw.strip()
    if not _FLOAT_RE.match(value):
        raise InvalidNumberError(field, raw)
    return float(value)


def _parse_name(line0: str) -> str:
    name = line0.strip()
    # 3LE files prefix the name line with "0 "
    if name.startswith("0 "):
        name = name[2:]
    return name[:NAME_WIDTH].strip()


def parse_tle(text: str, reference_year: int) -> OrbitalElementSet:
    """
    Parse and validate a three-line TLE record.

    Checks run in order: line count, line length, checksums, line numbers,
    field extraction, eccentricity range. The first failure is raised and no
    element set is created.

    Args:
        text: Name line, line 1 and line 2 separated by newlines
        reference_year: Year the two-digit epoch year is interpreted around
            (±50 years)

    Returns:
        OrbitalElementSet

    Raises:
        MissingLinesError, InvalidFormatError, InvalidChecksumError,
        InvalidNumberError, InvalidEccentricityError
    """
    lines = _split_lines(text)
    if len(lines) != 3:
        raise MissingLinesError(expected=3, actual=len(lines))

    line0, line1, line2 = lines

    for number, line in ((1, line1), (2, line2)):
        if len(line) < TLE_LINE_LENGTH:
            raise InvalidFormatError(
                f"Line {number} is too short (expected at least {TLE_LINE_LENGTH} characters, got {len(line)})"
            )

    validate_checksum(line1, 1)
    validate_checksum(line2, 2)

    if line1[0] != "1" or line2[0] != "2":
        raise InvalidFormatError("Lines must start with line numbers 1 and 2")

    f1 = {field: _column(line1, span) for field, span in LINE1_FIELDS.items()}
    f2 = {field: _column(line2, span) for field, span in LINE2_FIELDS.items()}

    two_digit_year = _to_int(f1["epoch_year"], "epoch_year")
    element_set_raw = f1["element_set_number"]

    eccentricity_raw = f2["eccentricity"].strip()
    if not eccentricity_raw.isdigit() or not eccentricity_raw.isascii():
        raise InvalidNumberError("eccentricity", f2["eccentricity"])
    eccentricity = validate_eccentricity(float("0." + eccentricity_raw))

    elements = OrbitalElementSet(
        name=_parse_name(line0),
        catalog_number=_to_int(f1["catalog_number"], "catalog_number"),
        classification=f1["classification"].strip(),
        international_designator=f1["international_designator"].strip(),
        epoch_year=expand_two_digit_year(two_digit_year, reference_year),
        epoch_day=_to_float(f1["epoch_day"], "epoch_day"),
        mean_motion_dot=_to_float(f1["mean_motion_dot"], "mean_motion_dot"),
        mean_motion_ddot=parse_tle_exponent(f1["mean_motion_ddot"], "mean_motion_ddot"),
        bstar=parse_tle_exponent(f1["bstar"], "bstar"),
        element_set_number=_to_int(element_set_raw, "element_set_number") if element_set_raw.strip() else 0,
        inclination=_to_float(f2["inclination"], "inclination"),
        raan=_to_float(f2["raan"], "raan"),
        eccentricity=eccentricity,
        argument_of_perigee=_to_float(f2["argument_of_perigee"], "argument_of_perigee"),
        mean_anomaly=_to_float(f2["mean_anomaly"], "mean_anomaly"),
        mean_motion=_to_float(f2["mean_motion"], "mean_motion"),
        revolutions_at_epoch=_to_int(f2["revolutions_at_epoch"], "revolutions_at_epoch"),
    )

    logger.debug(f"Parsed TLE: {elements.name} (#{elements.catalog_number}, epoch {elements.epoch_year}/{elements.epoch_day})")

    return elements


def parse_tle_now(text: str) -> OrbitalElementSet:
    """parse_tle() with the two-digit year window centred on the current UTC year."""
    return parse_tle(text, reference_year=utc_now().year)
