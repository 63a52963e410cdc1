"""
Runtime settings loaded from the environment (or a .env file).

The computational core never reads the environment itself; callers build a
Settings object once and pass the derived options down explicitly.

Recognised variables:
    EPHEMERIS_LOG_LEVEL                    (default INFO)
    EPHEMERIS_LOG_FILE                     (default unset)
    EPHEMERIS_PASS_STEP_SECONDS            (default 30)
    EPHEMERIS_BISECTION_TOLERANCE_SECONDS  (default 0.1)
    EPHEMERIS_APPLY_REFRACTION             (default false)
    EPHEMERIS_KEPLER_TOLERANCE             (default 1e-5)
    EPHEMERIS_KEPLER_MAX_ITERATIONS        (default 500)
"""

import os
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping, Optional, TypeVar

from dotenv import load_dotenv

from .constants import KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE

if TYPE_CHECKING:
    from orbit.propagator import KeplerianOrbit
    from tle.elements import OrbitalElementSet
    from tracking.passes import PassSearchSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _read(env: Mapping[str, str], name: str, parse: Callable[[str], T], default: T) -> T:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r} ({e})") from e


@dataclass(frozen=True)
class Settings:
    """Application-level configuration."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    pass_step_seconds: float = 30.0
    bisection_tolerance_seconds: float = 0.1
    apply_refraction: bool = False
    kepler_tolerance: float = KEPLER_TOLERANCE
    kepler_max_iterations: int = KEPLER_MAX_ITERATIONS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None,
                 dotenv_path: Optional[str] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read instead of os.environ (no .env loading then)
            dotenv_path: Explicit .env file; by default python-dotenv searches
                upwards from the working directory

        Returns:
            Settings with defaults for unset variables
        """
        if env is None:
            load_dotenv(dotenv_path)
            env = os.environ

        settings = cls(
            log_level=_read(env, "EPHEMERIS_LOG_LEVEL", str.upper, cls.log_level),
            log_file=env.get("EPHEMERIS_LOG_FILE") or None,
            pass_step_seconds=_read(env, "EPHEMERIS_PASS_STEP_SECONDS", float, cls.pass_step_seconds),
            bisection_tolerance_seconds=_read(
                env, "EPHEMERIS_BISECTION_TOLERANCE_SECONDS", float, cls.bisection_tolerance_seconds
            ),
            apply_refraction=_read(env, "EPHEMERIS_APPLY_REFRACTION", _parse_bool, cls.apply_refraction),
            kepler_tolerance=_read(env, "EPHEMERIS_KEPLER_TOLERANCE", float, cls.kepler_tolerance),
            kepler_max_iterations=_read(env, "EPHEMERIS_KEPLER_MAX_ITERATIONS", int, cls.kepler_max_iterations),
        )
        settings.validate()
        logger.debug(f"Settings loaded: {settings}")
        return settings

    def validate(self) -> None:
        if self.pass_step_seconds <= 0:
            raise ValueError("pass_step_seconds must be positive")
        if self.bisection_tolerance_seconds <= 0:
            raise ValueError("bisection_tolerance_seconds must be positive")
        if self.kepler_tolerance <= 0:
            raise ValueError("kepler_tolerance must be positive")
        if self.kepler_max_iterations < 1:
            raise ValueError("kepler_max_iterations must be at least 1")

    def pass_search(self) -> "PassSearchSettings":
        """PassSearchSettings for tracking.predict_passes()."""
        # orbit and tracking import utils, so these stay local at runtime
        from tracking.passes import PassSearchSettings

        return PassSearchSettings(
            step_seconds=self.pass_step_seconds,
            tolerance_seconds=self.bisection_tolerance_seconds,
            apply_refraction=self.apply_refraction,
        )

    def make_orbit(self, elements: "OrbitalElementSet") -> "KeplerianOrbit":
        """KeplerianOrbit for an element set using the configured solver limits."""
        from orbit.propagator import KeplerianOrbit

        return KeplerianOrbit.from_elements(
            elements,
            tolerance=self.kepler_tolerance,
            max_iterations=self.kepler_max_iterations,
        )
