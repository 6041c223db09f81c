"""
DemQuery Core Module

Core API, protocols, configuration, exceptions, and result types.
"""

from demquery.core.api import find_overlapping_tiles, find_products, search_tiles
from demquery.core.config import DEFAULT_CONFIG, ProviderConfig, load_config
from demquery.core.exceptions import (
    DecodeError,
    DemQueryError,
    FetchError,
    InvalidGeometryError,
    ManifestError,
    ParseError,
    ProductLookupError,
    ProjectionError,
    TileResolutionError,
    ValidationError,
)
from demquery.core.interfaces import ExtentResolver, ManifestProvider, ProductLookup
from demquery.core.result import OverlapResult, TileOutcome

__all__ = [
    # Protocols
    "ExtentResolver",
    "ManifestProvider",
    "ProductLookup",
    # Results
    "OverlapResult",
    "TileOutcome",
    # Configuration
    "DEFAULT_CONFIG",
    "ProviderConfig",
    "load_config",
    # Functions
    "find_overlapping_tiles",
    "find_products",
    "search_tiles",
    # Exceptions
    "DemQueryError",
    "DecodeError",
    "FetchError",
    "InvalidGeometryError",
    "ManifestError",
    "ParseError",
    "ProductLookupError",
    "ProjectionError",
    "TileResolutionError",
    "ValidationError",
]
