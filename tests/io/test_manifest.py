"""
Tests for product manifests
"""

import httpx
import pytest

from demquery.catalog.products import ProductRecord
from demquery.core.config import ProviderConfig
from demquery.core.exceptions import ManifestError
from demquery.io.manifest import HttpManifestProvider, manifest_url, split_manifest


def _product(link: str) -> ProductRecord:
    return ProductRecord(
        product_link=link,
        metadata_link="https://www.sciencebase.gov/catalog/item/x",
        publication_date="2020-06-01",
        name="CO_DRCOG_2020",
    )


class TestManifestUrl:
    """Test manifest location derivation"""

    def test_prefix_link(self, project_prefix):
        link = f"prd-tnm.s3.amazonaws.com/index.html?prefix={project_prefix}/"
        assert manifest_url(link) == (
            f"https://prd-tnm.s3.amazonaws.com/{project_prefix}/0_file_download_links.txt"
        )

    def test_prefix_without_trailing_slash(self, project_prefix):
        link = f"https://prd-tnm.s3.amazonaws.com/index.html?prefix={project_prefix}"
        assert manifest_url(link).endswith(f"{project_prefix}/0_file_download_links.txt")

    def test_other_query_parameters(self, project_prefix):
        link = f"https://host/index.html?delimiter=/&prefix={project_prefix}/&foo=bar"
        assert manifest_url(link) == (
            f"https://prd-tnm.s3.amazonaws.com/{project_prefix}/0_file_download_links.txt"
        )

    def test_custom_base(self):
        config = ProviderConfig(staged_products_base_url="https://mirror.example/", manifest_filename="links.txt")
        assert manifest_url("x?prefix=a/b", config) == "https://mirror.example/a/b/links.txt"

    @pytest.mark.parametrize("link", ["", "https://host/index.html", "https://host/?prefix=", "https://host/?prefix=/"])
    def test_missing_prefix(self, link):
        with pytest.raises(ManifestError):
            manifest_url(link)


class TestSplitManifest:
    """Test manifest splitting"""

    def test_trailing_blank_lines(self):
        assert split_manifest("a.tif\nb.tif\n\n\n") == ["a.tif", "b.tif"]

    def test_blank_lines_inside(self):
        assert split_manifest("\na.tif\n\nb.tif") == ["a.tif", "b.tif"]

    def test_crlf(self):
        assert split_manifest("a.tif\r\nb.tif\r\n") == ["a.tif", "b.tif"]

    def test_empty(self):
        assert split_manifest("") == []

    def test_order_preserved(self):
        assert split_manifest("c\nb\na") == ["c", "b", "a"]


class TestHttpManifestProvider:
    """Test fetching manifests"""

    @pytest.mark.asyncio
    async def test_fetch_manifest(self, project_prefix, make_tile_url):
        body = f"{make_tile_url('t1')}\n{make_tile_url('t2')}\n\n"
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text=body)

        product = _product(f"prd-tnm.s3.amazonaws.com/index.html?prefix={project_prefix}/")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            references = await HttpManifestProvider(client).fetch_manifest(product)

        assert references == [make_tile_url("t1"), make_tile_url("t2")]
        assert "" not in references
        assert requested == [f"https://prd-tnm.s3.amazonaws.com/{project_prefix}/0_file_download_links.txt"]

    @pytest.mark.asyncio
    async def test_fetch_manifest_http_error(self, project_prefix):
        transport = httpx.MockTransport(lambda request: httpx.Response(403, text="Forbidden"))
        product = _product(f"x?prefix={project_prefix}")
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(ManifestError):
                await HttpManifestProvider(client).fetch_manifest(product)

    @pytest.mark.asyncio
    async def test_fetch_manifest_without_prefix(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="a.tif"))
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(ManifestError):
                await HttpManifestProvider(client).fetch_manifest(_product("https://host/index.html"))

    @pytest.mark.asyncio
    async def test_fetch_manifest_invalid_location(self, project_prefix):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="a.tif"))
        config = ProviderConfig(staged_products_base_url="https://[::1/")
        product = _product(f"x?prefix={project_prefix}")
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(ManifestError):
                await HttpManifestProvider(client, config).fetch_manifest(product)
