"""
UTM zone selection and point reprojection
"""

import math
from dataclasses import dataclass
from functools import lru_cache

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from demquery.core.exceptions import ProjectionError


@dataclass(frozen=True)
class ProjectedPoint:
    """Point in a projected system; zone is None for non-UTM targets"""

    x: float
    y: float
    zone: int | None = None


def utm_zone_and_code(lon: float, lat: float) -> tuple[int, int]:
    """
    UTM zone and WGS84 / UTM EPSG code for a geographic point

    zone = floor((lon + 180) / 6) + 1, clamped to [1, 60]; the code is
    32600 + zone north of the equator (lat >= 0) and 32700 + zone otherwise.

    Examples:
        >>> utm_zone_and_code(-105.0, 39.7)
        (13, 32613)
        >>> utm_zone_and_code(-105.0, -39.7)
        (13, 32713)
    """
    zone = int(math.floor((lon + 180.0) / 6.0)) + 1
    zone = min(max(zone, 1), 60)
    code = (32600 if lat >= 0 else 32700) + zone
    return zone, code


def _normalize_crs(crs: str | int) -> str:
    if isinstance(crs, int):
        return f"EPSG:{crs}"
    return crs


@lru_cache(maxsize=128)
def _get_transformer(source: str, target: str) -> tuple[Transformer, int | None]:
    """Create (and cache) an always_xy transformer and the target's UTM zone"""
    try:
        transformer = Transformer.from_crs(source, target, always_xy=True)
        utm_zone = CRS.from_user_input(target).utm_zone
    except (CRSError, ProjError) as e:
        raise ProjectionError(f"Cannot build transform {source} -> {target}: {e}") from e
    zone = int(utm_zone[:-1]) if utm_zone else None
    return transformer, zone


def reproject(
    point: tuple[float, float],
    source_crs: str | int = "EPSG:4326",
    target_crs: str | int = "EPSG:4326",
) -> ProjectedPoint:
    """
    Transform a point between coordinate systems

    Args:
        point: (x, y), i.e. (lon, lat) for geographic input
        source_crs: Source system as "EPSG:NNNN" or an EPSG code
        target_crs: Target system as "EPSG:NNNN" or an EPSG code

    Returns:
        ProjectedPoint, with the UTM zone filled in for UTM targets

    Raises:
        ProjectionError: If a code is unsupported or the transform fails

    Examples:
        >>> p = reproject((-105.0, 39.7), "EPSG:4326", 32613)
        >>> round(p.x)
        500000
    """
    transformer, zone = _get_transformer(_normalize_crs(source_crs), _normalize_crs(target_crs))
    try:
        x, y = transformer.transform(point[0], point[1], errcheck=True)
    except ProjError as e:
        raise ProjectionError(f"Cannot transform point {point}: {e}") from e
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ProjectionError(f"Transform of {point} to {target_crs} is not finite")
    return ProjectedPoint(x=x, y=y, zone=zone)
