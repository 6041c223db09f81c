"""
UTM Tile Grid Implementation

Implements the 10km x 10km projected tile grid encoded in elevation tile names.
"""

import logging
import re
from typing import Tuple

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import DecodeError, ProjectionError
from demquery.grid.utm import reproject, utm_zone_and_code
from demquery.query.spatial import QueryRegion, TileExtent, envelope

logger = logging.getLogger(__name__)

# Label shared by tile rectangles and scaled regions so that grid-unit
# extents are never compared with geographic ones.
GRID_CRS = "utm-grid"


class UTMTileGrid:
    """
    Projected tile grid addressed by names like ``x51y434``

    Tile references embed the north-west corner of their tile:
    - x is the UTM easting divided by 10,000
    - y is the UTM northing divided by 10,000, i.e. northing / 100,000 with
      one extra decimal digit, so the decoded y is ``y_raw / 10``

    In grid units a tile spans 1.0 in X (east of x) and 0.1 in Y (south of y).

    Examples:
        >>> grid = UTMTileGrid()
        >>> grid.decode_reference("USGS_1M_13_x512y7341_CO_2020.tif")
        (512.0, 734.1)
        >>> extent = grid.get_tile_extent("USGS_1M_13_x512y7341_CO_2020.tif")
        >>> extent.bounds
        (512.0, 734.0, 513.0, 734.1)
    """

    def __init__(self, config: ProviderConfig = DEFAULT_CONFIG):
        """
        Initialize tile grid

        Args:
            config: Provider conventions (identifier pattern, divisors, tile span)
        """
        self.config = config
        self._pattern = re.compile(config.identifier_pattern)

    def parse_reference(self, reference: str) -> Tuple[int, int]:
        """
        Extract the raw (x, y) integers from a tile reference

        Only the first match is used.

        Raises:
            DecodeError: If the reference has no grid cell coordinate
        """
        match = self._pattern.search(reference)
        if match is None:
            raise DecodeError(f"No grid coordinate in tile reference: {reference}", reference)
        return int(match.group(1)), int(match.group(2))

    def decode_reference(self, reference: str) -> Tuple[float, float]:
        """
        Decode a tile reference into grid coordinates

        x is used as-is, y carries one extra decimal digit.
        """
        x_raw, y_raw = self.parse_reference(reference)
        return float(x_raw), y_raw / self.config.y_decimal_scale

    def get_tile_extent(self, reference: str) -> TileExtent:
        """
        Get the grid-unit rectangle of a tile

        Returns:
            TileExtent with minX = x, maxX = x + 1, minY = y - 0.1, maxY = y
        """
        x, y = self.decode_reference(reference)
        return TileExtent(
            west=x,
            east=x + self.config.tile_span_x,
            north=y,
            south=y - self.config.tile_span_y,
            crs=GRID_CRS,
        )

    def scale_region(self, region: QueryRegion) -> TileExtent:
        """
        Express a geographic region's envelope in grid units

        The UTM zone comes from the envelope's south-west corner only. A region
        spanning a zone boundary is projected entirely into that one zone.

        Raises:
            ProjectionError: If the region cannot be projected
        """
        env = envelope(region)
        zone, epsg_code = utm_zone_and_code(env.west, env.south)

        corners = [
            reproject((lon, lat), region.crs, epsg_code)
            for lon in (env.west, env.east)
            for lat in (env.south, env.north)
        ]
        xs = [p.x / self.config.grid_x_divisor for p in corners]
        ys = [p.y / self.config.grid_y_divisor for p in corners]

        scaled = TileExtent(
            west=min(xs),
            east=max(xs),
            north=max(ys),
            south=min(ys),
            crs=GRID_CRS,
        )
        logger.debug("Scaled region %s into zone %d (EPSG:%d): %s", env.bounds, zone, epsg_code, scaled.bounds)
        return scaled


def rectangles_overlap(a: TileExtent, b: TileExtent) -> bool:
    """
    Inclusive axis-aligned overlap test between two grid-unit rectangles

    Rectangles sharing only an edge or a corner overlap.

    Raises:
        ProjectionError: If the rectangles are labelled with different systems
    """
    if a.crs != b.crs:
        raise ProjectionError(f"Cannot compare extents in {a.crs} and {b.crs}")
    return (
        a.west <= b.east
        and a.east >= b.west
        and a.south <= b.north
        and a.north >= b.south
    )
