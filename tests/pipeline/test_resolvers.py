"""
Tests for tile extent resolvers
"""

import httpx
import pytest

from demquery.core.exceptions import DecodeError, FetchError, ValidationError
from demquery.grid.tile_grid import GRID_CRS
from demquery.pipeline.resolvers import (
    IdentifierExtentResolver,
    SidecarExtentResolver,
    create_resolver,
)
from demquery.query.spatial import QueryRegion


class TestCreateResolver:
    """Test create_resolver"""

    def test_identifier(self):
        assert isinstance(create_resolver("identifier"), IdentifierExtentResolver)

    @pytest.mark.asyncio
    async def test_sidecar(self):
        async with httpx.AsyncClient() as client:
            resolver = create_resolver("sidecar", client)
        assert isinstance(resolver, SidecarExtentResolver)
        assert resolver.client is client

    def test_sidecar_needs_client(self):
        with pytest.raises(ValidationError, match="client"):
            create_resolver("sidecar")

    def test_unknown_strategy(self):
        with pytest.raises(ValidationError, match="Invalid strategy"):
            create_resolver("raster")


class TestIdentifierExtentResolver:
    """Test IdentifierExtentResolver"""

    @pytest.mark.asyncio
    async def test_resolve_and_match(self, denver_bbox):
        resolver = IdentifierExtentResolver()
        target = resolver.comparison_region(QueryRegion.from_bbox(*denver_bbox))
        assert target.crs == GRID_CRS

        near = await resolver.resolve("USGS_1M_13_x50y440_CO_DRCOG_2020.tif")
        far = await resolver.resolve("USGS_1M_13_x52y440_CO_DRCOG_2020.tif")
        assert resolver.matches(near, target)
        assert not resolver.matches(far, target)

    @pytest.mark.asyncio
    async def test_resolve_without_grid_cell(self):
        with pytest.raises(DecodeError):
            await IdentifierExtentResolver().resolve("USGS_1M_13_CO_DRCOG_2020.tif")


class TestSidecarExtentResolver:
    """Test SidecarExtentResolver"""

    @pytest.mark.asyncio
    async def test_resolve_and_match(self, sidecar_transport, make_tile_url, denver_bbox):
        region = QueryRegion.from_bbox(*denver_bbox)
        async with httpx.AsyncClient(transport=sidecar_transport) as client:
            resolver = SidecarExtentResolver(client)
            assert resolver.comparison_region(region) is region

            extent = await resolver.resolve(make_tile_url("USGS_1M_13_x49y440_CO_DRCOG_2020"))
            assert resolver.matches(extent, region)

            with pytest.raises(FetchError):
                await resolver.resolve(make_tile_url("USGS_1M_13_x99y440_CO_DRCOG_2020"))
