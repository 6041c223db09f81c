"""
Query region model

Supports:
- WKT, GeoJSON (text or dict) and west,south,east,north extents
- Shapely geometry support
- Inclusive intersection between regions and tile extents
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import box, shape
from shapely.geometry.base import BaseGeometry

from demquery.core.exceptions import InvalidGeometryError, ProjectionError

GEOGRAPHIC_CRS = "EPSG:4326"

_EXTENT_TEXT = re.compile(r"^\s*" + r"\s*,\s*".join([r"([-+0-9.eE]+)"] * 4) + r"\s*$")


@dataclass(frozen=True)
class TileExtent:
    """
    Axis-aligned extent of a tile (or of a region's envelope)

    Attributes:
        west, east, north, south: Bounds in the units of ``crs``
        crs: Coordinate system label; None means unlabelled. Extents with
            different labels are never compared.
    """

    west: float
    east: float
    north: float
    south: float
    crs: str | None = GEOGRAPHIC_CRS

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounds as (minx, miny, maxx, maxy)"""
        return (self.west, self.south, self.east, self.north)

    def to_geometry(self) -> BaseGeometry:
        return box(self.west, self.south, self.east, self.north)


@dataclass(frozen=True)
class QueryRegion:
    """
    Immutable query region in geographic coordinates

    Shapely 2 geometries are immutable, so a region can be shared by any
    number of concurrent tile resolutions.

    Examples:
        >>> region = QueryRegion.from_bbox(-105.01, 39.70, -104.99, 39.72)
        >>> region.is_extent
        True
    """

    geometry: BaseGeometry
    crs: str = GEOGRAPHIC_CRS

    @classmethod
    def from_bbox(cls, west: float, south: float, east: float, north: float) -> "QueryRegion":
        """Build a region from an extent, enforcing west <= east and south <= north"""
        if west > east or south > north:
            raise InvalidGeometryError(
                f"Invalid extent ({west}, {south}, {east}, {north}): "
                "expected west <= east and south <= north"
            )
        return cls(box(west, south, east, north))

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return self.geometry.bounds

    @property
    def is_extent(self) -> bool:
        """True if the region is its own envelope"""
        return self.geometry.equals(self.geometry.envelope)

    @property
    def wkt(self) -> str:
        return self.geometry.wkt


RegionLike = Union[QueryRegion, BaseGeometry, dict, str, Path, tuple, list]


def parse_region(raw: RegionLike) -> QueryRegion:
    """
    Parse a query region from various input formats

    Args:
        raw: QueryRegion, Shapely geometry, GeoJSON dict or text, WKT text,
            "west,south,east,north" text, a 4-number sequence, or a path to
            a GeoJSON file

    Returns:
        QueryRegion in EPSG:4326

    Raises:
        InvalidGeometryError: If the input is not a well-formed geometry or extent

    Examples:
        >>> parse_region("POLYGON((0 0, 1 0, 1 1, 0 1, 0 0))").bounds
        (0.0, 0.0, 1.0, 1.0)
        >>> parse_region("-105.01,39.70,-104.99,39.72").is_extent
        True
    """
    if isinstance(raw, QueryRegion):
        return raw

    try:
        geometry = _parse_geometry(raw)
    except InvalidGeometryError:
        raise
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError) as e:
        raise InvalidGeometryError(f"Cannot parse query region: {e}") from e

    if isinstance(geometry, QueryRegion):
        return geometry
    if geometry.is_empty:
        raise InvalidGeometryError("Query region is empty")
    return QueryRegion(geometry)


def _parse_geometry(raw: RegionLike) -> Union[BaseGeometry, QueryRegion]:
    # Already a Shapely geometry
    if isinstance(raw, BaseGeometry):
        return raw

    if isinstance(raw, (tuple, list)):
        if len(raw) != 4:
            raise InvalidGeometryError(f"Extent needs 4 values, got {len(raw)}")
        west, south, east, north = (float(v) for v in raw)
        return QueryRegion.from_bbox(west, south, east, north)

    # Path to GeoJSON file
    if isinstance(raw, Path):
        if not raw.exists():
            raise InvalidGeometryError(f"GeoJSON file not found: {raw}")
        try:
            with open(raw) as f:
                document = json.load(f)
        except OSError as e:
            raise InvalidGeometryError(f"Cannot read GeoJSON file {raw}: {e}") from e
        return _geojson_to_geometry(document)

    if isinstance(raw, dict):
        return _geojson_to_geometry(raw)

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidGeometryError("Query region is empty")
        if text.startswith("{"):
            return _geojson_to_geometry(json.loads(text))
        match = _EXTENT_TEXT.match(text)
        if match:
            west, south, east, north = (float(v) for v in match.groups())
            return QueryRegion.from_bbox(west, south, east, north)
        return wkt.loads(text)

    raise InvalidGeometryError(f"Unsupported region type: {type(raw).__name__}")


def _geojson_to_geometry(geojson: dict) -> BaseGeometry:
    """
    Convert GeoJSON dict to Shapely geometry

    Handles both Feature and raw geometry types.
    """
    if geojson.get("type") == "FeatureCollection":
        features = geojson.get("features", [])
        if not features:
            raise InvalidGeometryError("Empty FeatureCollection")
        if len(features) == 1:
            return _feature_geometry(features[0])
        from shapely.ops import unary_union

        return unary_union([_feature_geometry(f) for f in features])

    if geojson.get("type") == "Feature":
        return _feature_geometry(geojson)

    return shape(geojson)


def _feature_geometry(feature: dict) -> BaseGeometry:
    geometry = feature.get("geometry")
    if geometry is None:
        raise InvalidGeometryError("GeoJSON feature has no geometry")
    return shape(geometry)


def envelope(region: Union[QueryRegion, TileExtent]) -> TileExtent:
    """
    Minimal axis-aligned extent of a region

    Identity for extents, bounding computation for any other geometry.
    """
    if isinstance(region, TileExtent):
        return region
    minx, miny, maxx, maxy = region.bounds
    return TileExtent(west=minx, east=maxx, north=maxy, south=miny, crs=region.crs)


def _as_geometry(value) -> tuple[BaseGeometry, str | None]:
    if isinstance(value, QueryRegion):
        return value.geometry, value.crs
    if isinstance(value, TileExtent):
        return value.to_geometry(), value.crs
    if isinstance(value, BaseGeometry):
        return value, None
    if isinstance(value, (tuple, list)) and len(value) == 4:
        return box(*value), None
    raise TypeError(f"Cannot intersect value of type {type(value).__name__}")


def intersects(a, b) -> bool:
    """
    Test whether two regions or extents share at least one point

    Touching at a boundary or corner counts as intersecting. The test is
    symmetric in its arguments.

    Raises:
        ProjectionError: If both operands are labelled with different
            coordinate systems

    Examples:
        >>> intersects((0, 0, 1, 1), (1, 1, 2, 2))
        True
    """
    geom_a, crs_a = _as_geometry(a)
    geom_b, crs_b = _as_geometry(b)
    if crs_a is not None and crs_b is not None and crs_a != crs_b:
        raise ProjectionError(f"Cannot compare extents in {crs_a} and {crs_b}")
    return bool(geom_a.intersects(geom_b))
