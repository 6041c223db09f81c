"""
Overlap pipeline

Resolves the extent of every tile in a manifest concurrently and keeps the
tiles that intersect the query region.

Concurrency model:
- one asyncio task per tile reference, joined with asyncio.gather
- at most ``max_concurrency`` resolutions in flight (semaphore gate)
- each resolution has its own timeout, started once it passes the gate
- cancelling the run cancels every in-flight resolution
- a failing tile is logged and excluded; it never aborts the batch
"""

import asyncio
import logging
import time
from typing import Any, Iterable

import httpx

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import FetchError, ProjectionError, TileResolutionError, ValidationError
from demquery.core.interfaces import ExtentResolver
from demquery.core.result import OverlapResult, TileOutcome
from demquery.pipeline.resolvers import create_resolver
from demquery.query.spatial import RegionLike, parse_region

logger = logging.getLogger(__name__)


class OverlapPipeline:
    """
    Filter tile references down to those overlapping a query region

    Attributes:
        resolver: Extent resolution strategy used for every tile of a run
        max_concurrency: Maximum resolutions in flight
        tile_timeout: Seconds allowed per tile resolution

    Examples:
        >>> async with httpx.AsyncClient() as client:
        ...     pipeline = OverlapPipeline(SidecarExtentResolver(client))
        ...     result = await pipeline.run(references, "-105.01,39.70,-104.99,39.72")
        >>> result.tiles
        ['https://.../TIFF/USGS_1M_13_x50y440_CO_2020.tif']
    """

    def __init__(
        self,
        resolver: ExtentResolver,
        max_concurrency: int | None = None,
        tile_timeout: float | None = None,
        config: ProviderConfig = DEFAULT_CONFIG,
    ):
        self.resolver = resolver
        self.max_concurrency = config.max_concurrency if max_concurrency is None else max_concurrency
        self.tile_timeout = config.tile_timeout if tile_timeout is None else tile_timeout
        if self.max_concurrency < 1:
            raise ValidationError(f"max_concurrency must be >= 1, got {self.max_concurrency}")
        if self.tile_timeout <= 0:
            raise ValidationError(f"tile_timeout must be positive, got {self.tile_timeout}")

    async def run(self, references: Iterable[str], region: RegionLike) -> OverlapResult:
        """
        Resolve and test every tile reference

        Args:
            references: Tile references (empty strings are skipped)
            region: Query region in any form accepted by parse_region

        Returns:
            OverlapResult with the overlapping references in input order and
            one outcome per resolved reference

        Raises:
            InvalidGeometryError: If the region cannot be parsed
            ProjectionError: If the region cannot be expressed in the
                resolver's coordinate system
        """
        start = time.monotonic()
        references = [ref for ref in references if ref]
        if not references:
            return OverlapResult(tiles=[], strategy=self.resolver.name)

        query_region = parse_region(region)
        target = self.resolver.comparison_region(query_region)

        logger.info(
            "Resolving %d tiles with %s strategy (max %d concurrent)",
            len(references),
            self.resolver.name,
            self.max_concurrency,
        )
        gate = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(
            *(self._resolve_one(ref, target, gate) for ref in references)
        )

        tiles = [o.reference for o in outcomes if o.ok and o.intersects]
        result = OverlapResult(
            tiles=tiles,
            outcomes=list(outcomes),
            strategy=self.resolver.name,
            elapsed=time.monotonic() - start,
        )
        if result.failed_count:
            logger.warning("%d of %d tiles could not be resolved", result.failed_count, len(references))
        logger.info("%r", result)
        return result

    async def _resolve_one(self, reference: str, target: Any, gate: asyncio.Semaphore) -> TileOutcome:
        async with gate:
            try:
                extent = await asyncio.wait_for(self.resolver.resolve(reference), timeout=self.tile_timeout)
                hit = self.resolver.matches(extent, target)
            except asyncio.TimeoutError:
                error = FetchError(f"Timed out after {self.tile_timeout}s", reference)
                logger.warning("Excluding %s: %s", reference, error)
                return TileOutcome(reference=reference, error=error)
            except (TileResolutionError, ProjectionError) as e:
                logger.warning("Excluding %s: %s", reference, e)
                return TileOutcome(reference=reference, error=e)

        logger.debug("%s -> %s (%s)", reference, extent.bounds, "overlaps" if hit else "disjoint")
        return TileOutcome(reference=reference, extent=extent, intersects=hit)


async def resolve_overlaps(
    tile_references: Iterable[str],
    region: RegionLike,
    strategy: str | ExtentResolver = "sidecar",
    config: ProviderConfig = DEFAULT_CONFIG,
    client: httpx.AsyncClient | None = None,
) -> list[str]:
    """
    Filter tile references down to those overlapping a region

    Args:
        tile_references: Tile references from a product manifest
        region: Query region
        strategy: "sidecar", "identifier", or a resolver instance
        config: Provider conventions and limits
        client: HTTP client for the sidecar strategy; one is created for the
            call if omitted

    Returns:
        Overlapping tile references. Callers needing a stable order must sort.

    Examples:
        >>> tiles = await resolve_overlaps(references, "-105.01,39.70,-104.99,39.72", "identifier")
    """
    references = [ref for ref in tile_references if ref]
    if not references:
        return []

    if not isinstance(strategy, str):
        result = await OverlapPipeline(strategy, config=config).run(references, region)
        return result.tiles

    if strategy == "sidecar" and client is None:
        async with httpx.AsyncClient(timeout=config.request_timeout) as own_client:
            resolver = create_resolver(strategy, own_client, config)
            result = await OverlapPipeline(resolver, config=config).run(references, region)
        return result.tiles

    resolver = create_resolver(strategy, client, config)
    result = await OverlapPipeline(resolver, config=config).run(references, region)
    return result.tiles
