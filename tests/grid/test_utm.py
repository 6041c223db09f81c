"""
Tests for UTM zone selection and reprojection
"""

import pytest

from demquery.core.exceptions import ProjectionError
from demquery.grid.utm import ProjectedPoint, reproject, utm_zone_and_code


class TestUtmZoneAndCode:
    """Test zone and EPSG code assignment"""

    def test_northern_hemisphere(self):
        assert utm_zone_and_code(-105.0, 39.7) == (13, 32613)

    def test_southern_hemisphere(self):
        assert utm_zone_and_code(-105.0, -39.7) == (13, 32713)

    def test_equator_is_north(self):
        assert utm_zone_and_code(0.5, 0.0) == (31, 32631)

    @pytest.mark.parametrize(
        "lon, zone",
        [
            (-180.0, 1),
            (-174.0, 2),
            (-174.0000001, 1),
            (-108.0, 13),
            (-102.0000001, 13),
            (-102.0, 14),
            (0.0, 31),
            (179.9999, 60),
            (180.0, 60),
        ],
    )
    def test_zone_boundaries(self, lon, zone):
        assert utm_zone_and_code(lon, 10.0)[0] == zone

    def test_clamped_outside_range(self):
        assert utm_zone_and_code(-200.0, 10.0) == (1, 32601)
        assert utm_zone_and_code(200.0, -10.0) == (60, 32760)


class TestReproject:
    """Test point reprojection"""

    def test_central_meridian(self):
        point = reproject((-105.0, 39.7), "EPSG:4326", "EPSG:32613")
        assert isinstance(point, ProjectedPoint)
        assert point.x == pytest.approx(500000.0, abs=1e-3)
        assert point.y == pytest.approx(4394437.0, abs=1000.0)
        assert point.zone == 13

    def test_integer_code(self):
        point = reproject((-105.0, 39.7), 4326, 32613)
        assert point.x == pytest.approx(500000.0, abs=1e-3)

    def test_southern_false_northing(self):
        point = reproject((-105.0, -39.7), "EPSG:4326", 32713)
        assert point.y == pytest.approx(10_000_000.0 - 4394437.0, abs=1000.0)
        assert point.zone == 13

    def test_non_utm_target_has_no_zone(self):
        point = reproject((0.0, 0.0), "EPSG:4326", "EPSG:3857")
        assert point.zone is None
        assert point.x == pytest.approx(0.0, abs=1e-6)

    def test_unsupported_code(self):
        with pytest.raises(ProjectionError):
            reproject((-105.0, 39.7), "EPSG:4326", "EPSG:999999")

    def test_unsupported_source(self):
        with pytest.raises(ProjectionError):
            reproject((-105.0, 39.7), "not-a-crs", "EPSG:32613")
