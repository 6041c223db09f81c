"""
Products and search CLI commands
"""

import argparse
import asyncio
from pathlib import Path

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig, load_config
from demquery.core.exceptions import DemQueryError


def _read_region(value: str) -> str | Path:
    """Region text, or a path when the argument names an existing file"""
    path = Path(value)
    if path.suffix.lower() in (".geojson", ".json") and path.is_file():
        return path
    if path.suffix.lower() == ".wkt" and path.is_file():
        return path.read_text()
    return value


def _load_config(args: argparse.Namespace) -> ProviderConfig:
    config = load_config(args.config) if args.config else DEFAULT_CONFIG
    return config.replace(
        max_concurrency=getattr(args, "max_concurrency", None),
        tile_timeout=getattr(args, "timeout", None),
    )


def run_products(args: argparse.Namespace) -> int:
    """Run the products command"""
    from demquery.core.api import find_products

    try:
        config = _load_config(args)
        products = find_products(
            _read_region(args.region), args.footprints, mode=args.mode, config=config, layer=args.layer
        )
    except DemQueryError as e:
        print(f"Error: {e}")
        return 1

    if not products:
        print("No products intersect the region")
        return 0

    for i, product in enumerate(products):
        print(f"[{i}] {product.name}")
        print(f"    Published: {product.publication_date}")
        print(f"    Product:   {product.product_link}")
        print(f"    Metadata:  {product.metadata_link}")
    return 0


def run_search(args: argparse.Namespace) -> int:
    """Run the search command"""
    from demquery.core.api import find_overlapping_tiles

    try:
        config = _load_config(args)
        result = asyncio.run(
            find_overlapping_tiles(
                _read_region(args.region),
                args.footprints,
                strategy=args.strategy,
                config=config,
                product_index=args.product_index,
                lookup_mode=args.mode,
                layer=args.layer,
            )
        )
    except DemQueryError as e:
        print(f"Error: {e}")
        return 1

    if result.product is None:
        print("No products intersect the region")
        return 0

    for tile in sorted(result.tiles):
        print(tile)

    if args.verbose:
        print()
        print(f"Product: {result.product.name}")
        print(repr(result))
        for reference, message in result.failures.items():
            print(f"  failed: {reference}: {message}")
    return 0
