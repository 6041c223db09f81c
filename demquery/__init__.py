"""
DemQuery - Find the high-resolution elevation tiles that overlap a region

Looks up the elevation products whose footprint intersects a query region,
then narrows a product's tile manifest down to the tiles that overlap it.

Quick Start:
    >>> import demquery as dq
    >>>
    >>> # Candidate products from a footprint GeoPackage
    >>> products = dq.find_products("-105.01,39.70,-104.99,39.72", "FESM_1m.gpkg")
    >>>
    >>> # Overlapping tiles of the first candidate
    >>> tiles = dq.search_tiles("-105.01,39.70,-104.99,39.72", "FESM_1m.gpkg")
    >>>
    >>> # Without a metadata request per tile
    >>> tiles = dq.search_tiles(region, "FESM_1m.gpkg", strategy="identifier")
"""

from demquery.core import (
    DEFAULT_CONFIG,
    DecodeError,
    # Exceptions
    DemQueryError,
    FetchError,
    InvalidGeometryError,
    ManifestError,
    OverlapResult,
    ParseError,
    ProductLookupError,
    ProjectionError,
    # Configuration
    ProviderConfig,
    TileOutcome,
    TileResolutionError,
    ValidationError,
    # Functions
    find_overlapping_tiles,
    find_products,
    load_config,
    search_tiles,
)
from demquery.query import QueryRegion, TileExtent, envelope, intersects, parse_region

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "DecodeError",
    "DemQueryError",
    "FetchError",
    "FootprintCatalog",
    "InvalidGeometryError",
    "ManifestError",
    "OverlapPipeline",
    "OverlapResult",
    "ParseError",
    "ProductLookupError",
    "ProjectionError",
    "ProviderConfig",
    "QueryRegion",
    "TileExtent",
    "TileOutcome",
    "TileResolutionError",
    "ValidationError",
    "__version__",
    "envelope",
    "find_overlapping_tiles",
    "find_products",
    "intersects",
    "load_config",
    "parse_region",
    "resolve_overlaps",
    "search_tiles",
    "utm_zone_and_code",
]


# Lazy imports (avoids loading geopandas/pyproj at startup)
def __getattr__(name):
    if name == "FootprintCatalog":
        from demquery.catalog.products import FootprintCatalog

        return FootprintCatalog
    elif name == "OverlapPipeline":
        from demquery.pipeline.overlap import OverlapPipeline

        return OverlapPipeline
    elif name == "resolve_overlaps":
        from demquery.pipeline.overlap import resolve_overlaps

        return resolve_overlaps
    elif name == "utm_zone_and_code":
        from demquery.grid.utm import utm_zone_and_code

        return utm_zone_and_code
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
