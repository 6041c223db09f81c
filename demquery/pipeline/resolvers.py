"""
Tile extent resolvers

Two interchangeable strategies for turning a tile reference into an extent
comparable with the query region:

- SidecarExtentResolver: fetches the tile's metadata document and compares
  geographic extents (one request per tile)
- IdentifierExtentResolver: decodes the grid cell embedded in the tile name
  and compares in scaled UTM grid units (no I/O)
"""

import logging

import httpx

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import ValidationError
from demquery.grid.tile_grid import UTMTileGrid, rectangles_overlap
from demquery.io.sidecar import fetch_sidecar_extent
from demquery.query.spatial import QueryRegion, TileExtent, intersects

logger = logging.getLogger(__name__)

STRATEGIES = ("sidecar", "identifier")


class SidecarExtentResolver:
    """
    Resolves tile extents from per-tile metadata documents

    Sidecar bounds are geographic, so the query region is compared as given.
    """

    name = "sidecar"

    def __init__(self, client: httpx.AsyncClient, config: ProviderConfig = DEFAULT_CONFIG):
        self.client = client
        self.config = config

    def comparison_region(self, region: QueryRegion) -> QueryRegion:
        return region

    async def resolve(self, reference: str) -> TileExtent:
        return await fetch_sidecar_extent(self.client, reference, self.config)

    def matches(self, extent: TileExtent, target: QueryRegion) -> bool:
        return intersects(extent, target)


class IdentifierExtentResolver:
    """
    Resolves tile extents from the grid coordinate in the tile name

    The query region's envelope is projected once into the UTM zone of its
    south-west corner and scaled into grid units; each tile is then a unit
    rectangle in the same units. Regions spanning two UTM zones are not
    handled correctly by this strategy.
    """

    name = "identifier"

    def __init__(self, config: ProviderConfig = DEFAULT_CONFIG):
        self.config = config
        self.grid = UTMTileGrid(config)

    def comparison_region(self, region: QueryRegion) -> TileExtent:
        return self.grid.scale_region(region)

    async def resolve(self, reference: str) -> TileExtent:
        return self.grid.get_tile_extent(reference)

    def matches(self, extent: TileExtent, target: TileExtent) -> bool:
        return rectangles_overlap(extent, target)


def create_resolver(
    strategy: str,
    client: httpx.AsyncClient | None = None,
    config: ProviderConfig = DEFAULT_CONFIG,
):
    """
    Build the resolver for a strategy name

    Args:
        strategy: "sidecar" or "identifier"
        client: HTTP client, required by the sidecar strategy
        config: Provider conventions

    Raises:
        ValidationError: If the strategy is unknown or a client is missing
    """
    if strategy == "sidecar":
        if client is None:
            raise ValidationError("The sidecar strategy needs an HTTP client")
        return SidecarExtentResolver(client, config)
    if strategy == "identifier":
        return IdentifierExtentResolver(config)
    raise ValidationError(f"Invalid strategy: {strategy}. Must be one of {STRATEGIES}")
