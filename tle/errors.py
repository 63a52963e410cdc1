"""
TLE parsing errors.

Every failure raises a subclass of TLEParseError (itself a ValueError) and no
element set is created.
"""


class TLEParseError(ValueError):
    """Base class for all TLE parsing failures."""


class MissingLinesError(TLEParseError):
    """The record does not contain exactly three lines."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid TLE: expected {expected} lines but got {actual}")


class InvalidFormatError(TLEParseError):
    """A line is too short or otherwise structurally malformed."""


class InvalidChecksumError(TLEParseError):
    """The modulo-10 checksum in column 69 does not match the line contents."""

    def __init__(self, line: int, expected: int, actual: int):
        self.line = line
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid checksum for line {line}: expected {expected} but got {actual}"
        )


class InvalidNumberError(TLEParseError):
    """A numeric field could not be parsed."""

    def __init__(self, field: str, raw_value: str):
        self.field = field
        self.raw_value = raw_value
        super().__init__(
            f"Invalid number in field '{field}': '{raw_value}' is not a valid number"
        )


class InvalidEccentricityError(TLEParseError):
    """Eccentricity is outside [0, 1)."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Invalid eccentricity: {value} must be less than 1.0")
