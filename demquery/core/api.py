"""
DemQuery Public API Functions

End-to-end search: query region -> candidate products -> manifest ->
overlapping tiles.
"""

import asyncio
import logging
from pathlib import Path

import httpx

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import ValidationError
from demquery.core.result import OverlapResult
from demquery.query.spatial import RegionLike, parse_region

logger = logging.getLogger(__name__)


def find_products(
    region: RegionLike,
    footprints: str | Path,
    mode: str = "filter",
    config: ProviderConfig = DEFAULT_CONFIG,
    layer: str | None = None,
) -> list:
    """
    List products whose footprint intersects a region

    Args:
        region: Query region (WKT, GeoJSON, extent, ...)
        footprints: Path to the footprint GeoPackage
        mode: "filter" (pushed-down bbox filter) or "scan" (per-part scan)
        config: Provider conventions
        layer: Layer name, if the dataset has several

    Returns:
        List of ProductRecord, possibly empty

    Raises:
        InvalidGeometryError: If the region cannot be parsed
        ProductLookupError: If the dataset cannot be read
    """
    from demquery.catalog.products import FootprintCatalog

    catalog = FootprintCatalog(footprints, config=config, layer=layer, mode=mode)
    return catalog.find_candidates(parse_region(region))


async def find_overlapping_tiles(
    region: RegionLike,
    footprints: str | Path,
    strategy: str = "sidecar",
    config: ProviderConfig = DEFAULT_CONFIG,
    product_index: int = 0,
    lookup_mode: str = "filter",
    layer: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> OverlapResult:
    """
    Find the elevation tiles of one candidate product that overlap a region

    Candidates are taken in dataset order and are not ranked; the product at
    ``product_index`` is searched.

    Args:
        region: Query region (WKT, GeoJSON, extent, ...)
        footprints: Path to the footprint GeoPackage
        strategy: "sidecar" or "identifier"
        config: Provider conventions and limits
        product_index: Which candidate product to search
        lookup_mode: Footprint lookup mode ("filter" or "scan")
        layer: Footprint layer name
        client: HTTP client to reuse; one is created if omitted

    Returns:
        OverlapResult; empty (with no product) if no footprint intersects

    Raises:
        InvalidGeometryError: If the region cannot be parsed
        ProductLookupError: If the footprint dataset cannot be read
        ManifestError: If the product manifest cannot be fetched
        ProjectionError: If the region cannot be projected for the strategy
        ValidationError: If product_index is out of range

    Examples:
        >>> result = await find_overlapping_tiles(
        ...     "POLYGON((-105.01 39.70, -104.99 39.70, -104.99 39.72, -105.01 39.72, -105.01 39.70))",
        ...     "FESM_1m.gpkg",
        ...     strategy="identifier",
        ... )
        >>> result.tiles
    """
    query_region = parse_region(region)
    products = find_products(query_region, footprints, mode=lookup_mode, config=config, layer=layer)
    if not products:
        return OverlapResult(tiles=[], strategy=strategy)
    if not 0 <= product_index < len(products):
        raise ValidationError(f"product_index {product_index} out of range: {len(products)} candidates")

    product = products[product_index]
    logger.info("Searching product %s (%d candidates)", product.name, len(products))

    if client is None:
        async with httpx.AsyncClient(timeout=config.request_timeout) as own_client:
            result = await _search_product(product, query_region, strategy, config, own_client)
    else:
        result = await _search_product(product, query_region, strategy, config, client)
    result.product = product
    return result


async def _search_product(product, region, strategy, config, client) -> OverlapResult:
    from demquery.io.manifest import HttpManifestProvider
    from demquery.pipeline import OverlapPipeline, create_resolver

    resolver = create_resolver(strategy, client, config)
    references = await HttpManifestProvider(client, config).fetch_manifest(product)
    return await OverlapPipeline(resolver, config=config).run(references, region)


def search_tiles(
    region: RegionLike,
    footprints: str | Path,
    strategy: str = "sidecar",
    config: ProviderConfig = DEFAULT_CONFIG,
    **kwargs,
) -> list[str]:
    """
    Blocking wrapper around find_overlapping_tiles returning only the tiles

    Examples:
        >>> import demquery as dq
        >>> tiles = dq.search_tiles("-105.01,39.70,-104.99,39.72", "FESM_1m.gpkg")
    """
    result = asyncio.run(find_overlapping_tiles(region, footprints, strategy, config, **kwargs))
    return result.tiles
