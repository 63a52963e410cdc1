"""
TLE parsing: fixed-column NORAD records to validated orbital element sets.
"""

from .elements import OrbitalElementSet
from .errors import (
    TLEParseError,
    MissingLinesError,
    InvalidFormatError,
    InvalidChecksumError,
    InvalidNumberError,
    InvalidEccentricityError,
)
from .parser import parse_tle, parse_tle_now, compute_checksum, parse_tle_exponent
from .catalog import TLECatalog

__all__ = [
    'OrbitalElementSet',
    'TLEParseError', 'MissingLinesError', 'InvalidFormatError', 'InvalidChecksumError',
    'InvalidNumberError', 'InvalidEccentricityError',
    'parse_tle', 'parse_tle_now', 'compute_checksum', 'parse_tle_exponent',
    'TLECatalog',
]
