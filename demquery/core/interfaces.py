"""
DemQuery Protocols

Contracts between the overlap pipeline and its collaborators:
- ProductLookup: query region -> candidate products
- ManifestProvider: product -> tile references
- ExtentResolver: tile reference -> comparable extent
"""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from demquery.catalog.products import ProductRecord
    from demquery.query.spatial import QueryRegion, TileExtent


class ProductLookup(Protocol):
    """Finds products whose footprint intersects a region"""

    def find_candidates(self, region: "QueryRegion") -> list["ProductRecord"]:
        """
        Find candidate products

        Returns:
            Products in dataset order; empty if nothing intersects

        Raises:
            ProductLookupError: If the footprint dataset cannot be read
        """
        ...


class ManifestProvider(Protocol):
    """Lists the tile references belonging to a product"""

    async def fetch_manifest(self, product: "ProductRecord") -> list[str]:
        """
        Fetch a product's manifest

        Returns:
            Tile references in manifest order, without empty lines

        Raises:
            ManifestError: If the manifest cannot be located or fetched
        """
        ...


class ExtentResolver(Protocol):
    """
    One strategy for deriving a tile's extent

    A pipeline run uses a single resolver, so every extent it compares is
    expressed in the same coordinate system as the comparison region.
    """

    name: str

    def comparison_region(self, region: "QueryRegion") -> Any:
        """
        Express the query region in the system this resolver's extents use

        Called once per run, before any tile is resolved.

        Raises:
            ProjectionError: If the region cannot be expressed in that system
        """
        ...

    async def resolve(self, reference: str) -> "TileExtent":
        """
        Resolve one tile's extent

        Raises:
            TileResolutionError: FetchError, ParseError or DecodeError
        """
        ...

    def matches(self, extent: "TileExtent", target: Any) -> bool:
        """Inclusive intersection test between a tile extent and the comparison region"""
        ...
