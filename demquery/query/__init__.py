"""
DemQuery Query Module

Query regions, tile extents and intersection testing.
"""

from demquery.query.spatial import (
    GEOGRAPHIC_CRS,
    QueryRegion,
    TileExtent,
    envelope,
    intersects,
    parse_region,
)

__all__ = [
    "GEOGRAPHIC_CRS",
    "QueryRegion",
    "TileExtent",
    "envelope",
    "intersects",
    "parse_region",
]
