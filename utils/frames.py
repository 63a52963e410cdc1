"""
Frame-tagged 3-D vectors and geodetic positions.

Each reference frame gets its own vector type so a transform can reject a
vector expressed in the wrong frame:

    EciVector  - Earth-Centered Inertial (km or km/s)
    EcefVector - Earth-Centered Earth-Fixed (km or km/s)
    EnuVector  - local East-North-Up tangent frame at an observer (km)
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict, Type, TypeVar

import numpy as np

V = TypeVar("V", bound="Vector3D")


class FrameError(TypeError):
    """A vector in one reference frame was passed where another was expected."""

    def __init__(self, expected: Type["Vector3D"], actual: object):
        self.expected = expected
        self.actual = type(actual)
        super().__init__(
            f"Expected {expected.__name__}, got {type(actual).__name__}"
        )


@dataclass(frozen=True)
class Vector3D:
    """Plain (x, y, z) triple. Use the frame subclasses for positions and velocities."""

    x: float
    y: float
    z: float

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def subtract(self: V, other: "Vector3D") -> V:
        """Component-wise difference; both vectors must share a frame."""
        require_frame(other, type(self))
        return type(self)(self.x - other.x, self.y - other.y, self.z - other.z)

    def dot(self, other: "Vector3D") -> float:
        require_frame(other, type(self))
        return self.x * other.x + self.y * other.y + self.z * other.z

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls: Type[V], values) -> V:
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls: Type[V], data: Dict[str, float]) -> V:
        return cls(float(data["x"]), float(data["y"]), float(data["z"]))


@dataclass(frozen=True)
class EciVector(Vector3D):
    """Vector in the Earth-Centered Inertial frame."""


@dataclass(frozen=True)
class EcefVector(Vector3D):
    """Vector in the Earth-Centered Earth-Fixed frame."""


@dataclass(frozen=True)
class EnuVector(Vector3D):
    """Vector in an observer's East-North-Up frame (x=East, y=North, z=Up)."""

    @property
    def east(self) -> float:
        return self.x

    @property
    def north(self) -> float:
        return self.y

    @property
    def up(self) -> float:
        return self.z


def require_frame(vector: object, frame: Type[Vector3D]) -> None:
    """Raise FrameError unless ``vector`` is exactly of type ``frame``."""
    if type(vector) is not frame:
        raise FrameError(frame, vector)


@dataclass(frozen=True)
class GeodeticPosition:
    """Latitude/longitude in degrees, altitude in kilometres."""

    latitude: float
    longitude: float
    altitude: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "GeodeticPosition":
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            altitude=float(data["altitude"]),
        )
