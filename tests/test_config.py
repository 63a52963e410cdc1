"""
Tests for environment-driven settings.
"""

import inspect
import os

import pytest

from orbit import KeplerianOrbit
from tracking import PassSearchSettings
from utils.config import Settings

VARIABLES = (
    "EPHEMERIS_LOG_LEVEL",
    "EPHEMERIS_LOG_FILE",
    "EPHEMERIS_PASS_STEP_SECONDS",
    "EPHEMERIS_BISECTION_TOLERANCE_SECONDS",
    "EPHEMERIS_APPLY_REFRACTION",
    "EPHEMERIS_KEPLER_TOLERANCE",
    "EPHEMERIS_KEPLER_MAX_ITERATIONS",
)


@pytest.fixture
def clean_environ():
    saved = {name: os.environ.pop(name) for name in VARIABLES if name in os.environ}
    yield
    for name in VARIABLES:
        os.environ.pop(name, None)
    os.environ.update(saved)


class TestFromEnv:

    def test_defaults(self) -> None:
        settings = Settings.from_env(env={})

        assert settings == Settings()
        assert settings.pass_step_seconds == 30.0
        assert settings.bisection_tolerance_seconds == 0.1
        assert settings.apply_refraction is False
        assert settings.kepler_tolerance == 1e-5
        assert settings.kepler_max_iterations == 500

    def test_values(self) -> None:
        env = {
            "EPHEMERIS_LOG_LEVEL": "debug",
            "EPHEMERIS_LOG_FILE": "logs/ephemeris.log",
            "EPHEMERIS_PASS_STEP_SECONDS": "15",
            "EPHEMERIS_BISECTION_TOLERANCE_SECONDS": "0.01",
            "EPHEMERIS_APPLY_REFRACTION": "yes",
            "EPHEMERIS_KEPLER_TOLERANCE": "1e-10",
            "EPHEMERIS_KEPLER_MAX_ITERATIONS": "50",
        }

        settings = Settings.from_env(env=env)

        assert settings.log_level == "DEBUG"
        assert settings.log_file == "logs/ephemeris.log"
        assert settings.pass_step_seconds == 15.0
        assert settings.bisection_tolerance_seconds == 0.01
        assert settings.apply_refraction is True
        assert settings.kepler_tolerance == 1e-10
        assert settings.kepler_max_iterations == 50

    def test_empty_log_file_is_unset(self) -> None:
        assert Settings.from_env(env={"EPHEMERIS_LOG_FILE": ""}).log_file is None

    @pytest.mark.parametrize(
        "name, value",
        [
            ("EPHEMERIS_APPLY_REFRACTION", "maybe"),
            ("EPHEMERIS_PASS_STEP_SECONDS", "fast"),
            ("EPHEMERIS_PASS_STEP_SECONDS", "0"),
            ("EPHEMERIS_BISECTION_TOLERANCE_SECONDS", "-1"),
            ("EPHEMERIS_KEPLER_MAX_ITERATIONS", "0"),
            ("EPHEMERIS_KEPLER_MAX_ITERATIONS", "2.5"),
        ],
    )
    def test_invalid(self, name, value) -> None:
        with pytest.raises(ValueError):
            Settings.from_env(env={name: value})

    def test_dotenv_file(self, tmp_path, clean_environ) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("EPHEMERIS_PASS_STEP_SECONDS=12\nEPHEMERIS_APPLY_REFRACTION=true\n")

        settings = Settings.from_env(dotenv_path=str(dotenv))

        assert settings.pass_step_seconds == 12.0
        assert settings.apply_refraction is True

    def test_environment_wins_over_dotenv(self, tmp_path, clean_environ) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text("EPHEMERIS_PASS_STEP_SECONDS=12\n")
        os.environ["EPHEMERIS_PASS_STEP_SECONDS"] = "45"

        assert Settings.from_env(dotenv_path=str(dotenv)).pass_step_seconds == 45.0


class TestDerivedObjects:

    def test_pass_search(self) -> None:
        settings = Settings(pass_step_seconds=20.0, bisection_tolerance_seconds=0.5, apply_refraction=True)

        assert settings.pass_search() == PassSearchSettings(
            step_seconds=20.0, tolerance_seconds=0.5, apply_refraction=True
        )

    def test_make_orbit(self, iss_elements) -> None:
        orbit = Settings(kepler_tolerance=1e-8, kepler_max_iterations=20).make_orbit(iss_elements)

        assert isinstance(orbit, KeplerianOrbit)
        assert orbit.tolerance == 1e-8
        assert orbit.max_iterations == 20

    def test_return_annotations(self) -> None:
        assert inspect.signature(Settings.pass_search).return_annotation == "PassSearchSettings"
        assert inspect.signature(Settings.make_orbit).return_annotation == "KeplerianOrbit"
