"""
Shared fixtures: reference TLE records and a ground observer.
"""

import sys
from pathlib import Path

import pytest

# Make the top-level packages importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from orbit import KeplerianOrbit
from tle import parse_tle
from tracking import Observer

REFERENCE_YEAR = 2025

ISS_TLE = """ISS (ZARYA)
1 25544U 98067A   20097.82871450  .00000874  00000-0  24271-4 0  9992
2 25544  51.6465 341.5807 0003880  94.4223  26.1197 15.48685836220958"""

NOAA16_TLE = """NOAA 16 [-]
1 26536U 00055A   20116.52380576 -.00000007  00000-0  19116-4 0  9998
2 26536  98.7361 186.8634 0009660 233.4374 126.5910 14.13250159306768"""

# Near-circular, near-equatorial orbit with every angle at zero
EQUATORIAL_TLE = """EQUATORIAL TEST
1 99999U 20001A   20097.50000000  .00000000  00000-0  00000-0 0  9991
2 99999   0.1000   0.0000 0001000   0.0000   0.0000 15.00000000000016"""


@pytest.fixture
def iss_elements():
    return parse_tle(ISS_TLE, REFERENCE_YEAR)


@pytest.fixture
def iss_orbit(iss_elements):
    return KeplerianOrbit.from_elements(iss_elements)


@pytest.fixture
def noaa16_orbit():
    return KeplerianOrbit.from_elements(parse_tle(NOAA16_TLE, REFERENCE_YEAR))


@pytest.fixture
def equatorial_orbit():
    return KeplerianOrbit.from_elements(parse_tle(EQUATORIAL_TLE, REFERENCE_YEAR))


@pytest.fixture
def louisville():
    return Observer(latitude=38.2542, longitude=-85.7594, altitude_m=140.0, name="Louisville")
