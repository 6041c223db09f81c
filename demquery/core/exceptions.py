"""
DemQuery Exceptions

Exception hierarchy for error handling.

Request-level errors (InvalidGeometryError, ManifestError, ProductLookupError)
fail the whole search. TileResolutionError subclasses are scoped to a single
tile and only remove that tile from the result.
"""


class DemQueryError(Exception):
    """Base exception for DemQuery"""

    pass


class ValidationError(DemQueryError):
    """Configuration or argument validation failed"""

    pass


class InvalidGeometryError(DemQueryError):
    """Query region is not a well-formed geometry or extent"""

    pass


class ProjectionError(DemQueryError):
    """Coordinate reference system transform failed or is unsupported"""

    pass


class ManifestError(DemQueryError):
    """Product manifest could not be located or fetched"""

    pass


class ProductLookupError(DemQueryError):
    """Footprint dataset could not be read"""

    pass


class TileResolutionError(DemQueryError):
    """Extent of a single tile could not be resolved"""

    def __init__(self, message: str, reference: str | None = None):
        super().__init__(message)
        self.reference = reference


class FetchError(TileResolutionError):
    """Network or transport failure while fetching a tile document"""

    pass


class ParseError(TileResolutionError):
    """Sidecar document is malformed or missing a bound"""

    pass


class DecodeError(TileResolutionError):
    """Tile reference does not follow the expected naming convention"""

    pass
