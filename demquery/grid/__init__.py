"""
DemQuery Grid Module

UTM zone selection and the projected tile grid used by elevation tile names.
"""

from demquery.grid.tile_grid import GRID_CRS, UTMTileGrid, rectangles_overlap
from demquery.grid.utm import ProjectedPoint, reproject, utm_zone_and_code

__all__ = [
    "GRID_CRS",
    "ProjectedPoint",
    "UTMTileGrid",
    "rectangles_overlap",
    "reproject",
    "utm_zone_and_code",
]
