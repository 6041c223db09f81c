"""
Decode CLI command

Prints the grid rectangle encoded in each tile reference.
"""

import argparse

from demquery.core.config import DEFAULT_CONFIG, load_config
from demquery.core.exceptions import DecodeError, DemQueryError
from demquery.grid.tile_grid import UTMTileGrid


def run_decode(args: argparse.Namespace) -> int:
    """Run the decode command"""
    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
    except DemQueryError as e:
        print(f"Error: {e}")
        return 1

    grid = UTMTileGrid(config)
    status = 0
    for reference in args.references:
        try:
            extent = grid.get_tile_extent(reference)
        except DecodeError as e:
            print(f"{reference}: {e}")
            status = 1
            continue
        print(
            f"{reference}: x {extent.west:g}..{extent.east:g}, "
            f"y {extent.south:g}..{extent.north:g}"
        )
    return status
