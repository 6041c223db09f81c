"""
Per-tile metadata sidecar documents.

Each raster tile is published next to an XML metadata document holding the
tile's geographic bounding coordinates.
"""

import logging
import xml.etree.ElementTree as ET

import httpx

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import DecodeError, FetchError, ParseError
from demquery.query.spatial import GEOGRAPHIC_CRS, TileExtent

logger = logging.getLogger(__name__)


def sidecar_url(reference: str, config: ProviderConfig = DEFAULT_CONFIG) -> str:
    """
    Derive the metadata document location of a tile

    Examples:
        >>> sidecar_url("https://host/Projects/CO/TIFF/USGS_1M_13_x51y434.tif")
        'https://host/Projects/CO/metadata/USGS_1M_13_x51y434.xml'

    Raises:
        DecodeError: If the reference does not follow the tile location convention
    """
    if config.tile_path_segment not in reference or not reference.endswith(config.tile_extension):
        raise DecodeError(f"Not a tile location: {reference}", reference)

    stem = reference[: -len(config.tile_extension)]
    stem = stem.replace(config.tile_path_segment, config.sidecar_path_segment)
    return stem + config.sidecar_extension


def parse_sidecar_bounds(document: str, config: ProviderConfig = DEFAULT_CONFIG) -> TileExtent:
    """
    Parse the bounding coordinates out of a sidecar document.

    Tag names are matched exactly (namespaced tags do not match); the first
    occurrence of each bound wins and every other element is ignored.

    Raises:
        ParseError: If the document is not XML, a bound is missing, or a bound
            is not a number
    """
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise ParseError(f"Malformed sidecar document: {e}") from e

    values = {}
    for bound, tag in config.bound_tags.items():
        elem = next(root.iter(tag), None)
        if elem is None:
            raise ParseError(f"Sidecar document has no <{tag}>")
        text = (elem.text or "").strip()
        try:
            values[bound] = float(text)
        except ValueError as e:
            raise ParseError(f"<{tag}> is not a number: {text!r}") from e

    return TileExtent(crs=GEOGRAPHIC_CRS, **values)


async def fetch_sidecar_extent(
    client: httpx.AsyncClient,
    reference: str,
    config: ProviderConfig = DEFAULT_CONFIG,
) -> TileExtent:
    """
    Fetch and parse the sidecar document of one tile

    Args:
        client: HTTP client shared by the pipeline run
        reference: Tile location
        config: Provider conventions

    Returns:
        Geographic TileExtent of the tile

    Raises:
        DecodeError: If the reference is not a tile location
        FetchError: On transport failure, an invalid location or a non-success status
        ParseError: If the document is malformed
    """
    url = sidecar_url(reference, config)
    try:
        response = await client.get(url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(f"Failed to fetch {url}: {e}", reference) from e

    try:
        return parse_sidecar_bounds(response.text, config)
    except ParseError as e:
        e.reference = reference
        raise
