"""
Tests for frame-tagged vectors and coordinate transforms.

WGS-84 reference values come from skyfield.
"""

import math

import numpy as np
import pytest
from skyfield.api import wgs84

from utils.constants import WGS84_A, WGS84_B
from utils.coordinates import (
    compute_range_rate,
    ecef_direction_to_enu,
    ecef_to_eci,
    ecef_to_enu,
    ecef_to_geodetic,
    eci_to_ecef,
    eci_velocity_to_ecef,
    enu_to_az_el,
    geodetic_to_ecef,
    spherical_geodetic,
)
from utils.frames import EcefVector, EciVector, EnuVector, FrameError, GeodeticPosition, Vector3D


class TestFrames:

    def test_magnitude(self) -> None:
        assert EciVector(3.0, 4.0, 12.0).magnitude == 13.0

    def test_subtract_same_frame(self) -> None:
        result = EcefVector(5.0, 5.0, 5.0).subtract(EcefVector(1.0, 2.0, 3.0))

        assert result == EcefVector(4.0, 3.0, 2.0)
        assert type(result) is EcefVector

    def test_subtract_mixed_frames(self) -> None:
        with pytest.raises(FrameError) as exc_info:
            EcefVector(1.0, 2.0, 3.0).subtract(EciVector(1.0, 2.0, 3.0))

        assert exc_info.value.expected is EcefVector
        assert exc_info.value.actual is EciVector
        assert isinstance(exc_info.value, TypeError)

    def test_dot_mixed_frames(self) -> None:
        with pytest.raises(FrameError):
            EnuVector(1.0, 0.0, 0.0).dot(Vector3D(1.0, 0.0, 0.0))

    def test_array_conversion(self) -> None:
        vector = EciVector.from_array(np.array([1.5, -2.0, 3.25]))

        assert vector == EciVector(1.5, -2.0, 3.25)
        np.testing.assert_array_equal(vector.as_array(), [1.5, -2.0, 3.25])

    def test_dict_conversion(self) -> None:
        vector = EnuVector(1.0, 2.0, 3.0)

        assert EnuVector.from_dict(vector.to_dict()) == vector
        assert (vector.east, vector.north, vector.up) == (1.0, 2.0, 3.0)

    def test_transforms_reject_wrong_frame(self) -> None:
        with pytest.raises(FrameError):
            eci_to_ecef(EcefVector(7000.0, 0.0, 0.0), 0.3)
        with pytest.raises(FrameError):
            ecef_to_eci(EciVector(7000.0, 0.0, 0.0), 0.3)
        with pytest.raises(FrameError):
            ecef_to_enu(EciVector(7000.0, 0.0, 0.0), EcefVector(6378.0, 0.0, 0.0), 0.0, 0.0)
        with pytest.raises(FrameError):
            enu_to_az_el(EcefVector(1.0, 0.0, 0.0))
        with pytest.raises(FrameError):
            ecef_to_geodetic(EciVector(7000.0, 0.0, 0.0))


class TestGeodeticToEcef:

    @pytest.mark.parametrize(
        "lat, lon, alt_m",
        [
            (38.2542, -85.7594, 140.0),
            (0.0, 0.0, 0.0),
            (-33.8688, 151.2093, 58.0),
            (89.5, 45.0, 2500.0),
            (51.4779, -0.0015, 45.0),
        ],
    )
    def test_matches_skyfield(self, lat, lon, alt_m) -> None:
        expected = wgs84.latlon(lat, lon, elevation_m=alt_m).itrs_xyz.km

        ecef = geodetic_to_ecef(lat, lon, alt_m)

        np.testing.assert_allclose(ecef.as_array(), expected, atol=1e-6)

    def test_equator_and_pole(self) -> None:
        assert geodetic_to_ecef(0.0, 0.0, 0.0).x == pytest.approx(WGS84_A)
        assert geodetic_to_ecef(90.0, 0.0, 0.0).z == pytest.approx(WGS84_B)

    def test_altitude_in_metres(self) -> None:
        assert geodetic_to_ecef(0.0, 90.0, 1000.0).y == pytest.approx(WGS84_A + 1.0)


class TestEcefToGeodetic:

    @pytest.mark.parametrize(
        "lat, lon, alt_m",
        [
            (38.2542, -85.7594, 140.0),
            (-45.0, 170.0, 400000.0),
            (0.0, -179.5, 0.0),
            (75.0, 20.0, 35786000.0),
        ],
    )
    def test_round_trip(self, lat, lon, alt_m) -> None:
        geodetic = ecef_to_geodetic(geodetic_to_ecef(lat, lon, alt_m))

        assert geodetic.latitude == pytest.approx(lat, abs=1e-8)
        assert geodetic.longitude == pytest.approx(lon, abs=1e-8)
        # Sub-metre
        assert geodetic.altitude == pytest.approx(alt_m / 1000.0, abs=1e-3)

    def test_pole(self) -> None:
        geodetic = ecef_to_geodetic(EcefVector(0.0, 0.0, WGS84_B + 10.0))

        assert geodetic.latitude == pytest.approx(90.0)
        assert geodetic.altitude == pytest.approx(10.0, abs=1e-6)


class TestSphericalGeodetic:

    def test_mean_radius(self) -> None:
        geodetic = spherical_geodetic(EcefVector(0.0, 6771.0, 0.0))

        assert isinstance(geodetic, GeodeticPosition)
        assert geodetic.latitude == pytest.approx(0.0, abs=1e-12)
        assert geodetic.longitude == pytest.approx(90.0)
        assert geodetic.altitude == pytest.approx(400.0)

    def test_latitude_is_geocentric(self) -> None:
        geodetic = spherical_geodetic(EcefVector(5000.0, 0.0, 5000.0))

        assert geodetic.latitude == pytest.approx(45.0)
        assert geodetic.longitude == 0.0


class TestInertialToFixed:

    def test_zero_gmst_is_identity(self) -> None:
        ecef = eci_to_ecef(EciVector(7000.0, 100.0, -50.0), 0.0)

        assert ecef == EcefVector(7000.0, 100.0, -50.0)

    def test_quarter_turn(self) -> None:
        ecef = eci_to_ecef(EciVector(7000.0, 0.0, 0.0), math.pi / 2)

        assert ecef.x == pytest.approx(0.0, abs=1e-9)
        assert ecef.y == pytest.approx(-7000.0)

    def test_inverse(self) -> None:
        eci = EciVector(-4200.0, 5100.0, 1800.0)

        back = ecef_to_eci(eci_to_ecef(eci, 1.234), 1.234)

        np.testing.assert_allclose(back.as_array(), eci.as_array(), atol=1e-9)

    def test_velocity_of_stationary_point(self) -> None:
        # A point co-rotating with the Earth has zero ECEF velocity
        r = 6378.137
        omega = 7.292115855e-5
        pos = EciVector(r, 0.0, 0.0)
        vel = EciVector(0.0, omega * r, 0.0)

        v_ecef = eci_velocity_to_ecef(pos, vel, 0.7)

        assert v_ecef.magnitude == pytest.approx(0.0, abs=1e-12)
        assert type(v_ecef) is EcefVector


class TestTopocentric:

    @pytest.fixture
    def origin(self):
        return geodetic_to_ecef(0.0, 0.0, 0.0)

    def test_zenith(self, origin) -> None:
        enu = ecef_to_enu(EcefVector(WGS84_A + 500.0, 0.0, 0.0), origin, 0.0, 0.0)
        azimuth, elevation, range_km = enu_to_az_el(enu)

        assert enu.up == pytest.approx(500.0)
        assert elevation == pytest.approx(90.0)
        assert range_km == pytest.approx(500.0)

    @pytest.mark.parametrize(
        "target, expected_azimuth",
        [
            ((WGS84_A, 0.0, 1000.0), 0.0),
            ((WGS84_A, 1000.0, 0.0), 90.0),
            ((WGS84_A, 0.0, -1000.0), 180.0),
            ((WGS84_A, -1000.0, 0.0), 270.0),
        ],
    )
    def test_cardinal_azimuths(self, origin, target, expected_azimuth) -> None:
        enu = ecef_to_enu(EcefVector(*target), origin, 0.0, 0.0)
        azimuth, elevation, range_km = enu_to_az_el(enu)

        assert azimuth == pytest.approx(expected_azimuth, abs=1e-9)
        assert elevation == pytest.approx(0.0, abs=1e-9)
        assert range_km == pytest.approx(1000.0)

    def test_azimuth_range(self) -> None:
        for east, north in ((-1.0, 1.0), (-1e-18, 1.0), (0.0, -1.0), (1.0, 0.0)):
            azimuth, _, _ = enu_to_az_el(EnuVector(east, north, 0.5))

            assert 0.0 <= azimuth < 360.0

    def test_below_horizon(self) -> None:
        _, elevation, _ = enu_to_az_el(EnuVector(0.0, 100.0, -100.0))

        assert elevation == pytest.approx(-45.0)

    def test_direction_is_not_translated(self) -> None:
        enu = ecef_direction_to_enu(EcefVector(0.0, 0.0, 1.0), 0.0, 0.0)

        np.testing.assert_allclose(enu.as_array(), [0.0, 1.0, 0.0], atol=1e-12)

    def test_range_rate(self) -> None:
        receding = compute_range_rate(EnuVector(0.0, 0.0, 500.0), EnuVector(0.0, 0.0, 2.0))
        crossing = compute_range_rate(EnuVector(0.0, 0.0, 500.0), EnuVector(7.0, 0.0, 0.0))

        assert receding == pytest.approx(2.0)
        assert crossing == pytest.approx(0.0)
        assert compute_range_rate(EnuVector(0.0, 0.0, 0.0), EnuVector(1.0, 0.0, 0.0)) == 0.0
