"""
Product manifests

A manifest is a newline-separated list of tile download locations published
alongside each staged product.
"""

import logging
from urllib.parse import parse_qs, urlsplit

import httpx

from demquery.catalog.products import ProductRecord
from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import ManifestError

logger = logging.getLogger(__name__)


def manifest_url(product_link: str, config: ProviderConfig = DEFAULT_CONFIG) -> str:
    """
    Derive the manifest location from a product link

    Product links point at a bucket listing page with the product's key
    prefix in a ``prefix=`` query parameter; the manifest lives under that
    prefix in the staged products bucket.

    Examples:
        >>> manifest_url("prd-tnm.s3.amazonaws.com/index.html?prefix=StagedProducts/Elevation/1m/Projects/CO_A/")
        'https://prd-tnm.s3.amazonaws.com/StagedProducts/Elevation/1m/Projects/CO_A/0_file_download_links.txt'

    Raises:
        ManifestError: If the link has no prefix parameter
    """
    prefixes = parse_qs(urlsplit(product_link).query).get("prefix")
    if not prefixes or not prefixes[0].strip("/"):
        raise ManifestError(f"Product link has no prefix parameter: {product_link}")

    base = config.staged_products_base_url.rstrip("/")
    prefix = prefixes[0].strip("/")
    return f"{base}/{prefix}/{config.manifest_filename}"


def split_manifest(text: str) -> list[str]:
    """Split manifest text into tile references, dropping blank lines"""
    return [line.strip() for line in text.split("\n") if line.strip()]


class HttpManifestProvider:
    """
    Fetches product manifests over HTTP

    Examples:
        >>> async with httpx.AsyncClient() as client:
        ...     provider = HttpManifestProvider(client)
        ...     references = await provider.fetch_manifest(product)
    """

    def __init__(self, client: httpx.AsyncClient, config: ProviderConfig = DEFAULT_CONFIG):
        self.client = client
        self.config = config

    async def fetch_manifest(self, product: ProductRecord) -> list[str]:
        """
        Fetch the tile references of a product

        Raises:
            ManifestError: If the manifest cannot be located or fetched
        """
        url = manifest_url(product.product_link, self.config)
        logger.info(
            "Fetching manifest for %s (published %s) from %s",
            product.name,
            product.publication_date,
            url,
        )
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ManifestError(f"Failed to fetch manifest {url}: {e}") from e

        references = split_manifest(response.text)
        logger.info("Manifest for %s lists %d tiles", product.name, len(references))
        return references
