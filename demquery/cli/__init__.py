"""
DemQuery CLI Entry Points

Provides command-line interface for:
- products: List candidate products for a region
- search: List the overlapping tiles of a candidate product
- decode: Show the grid rectangle encoded in tile names
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog="demquery",
        description="DemQuery - Find elevation tiles overlapping a region",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  demquery products "-105.01,39.70,-104.99,39.72" --footprints FESM_1m.gpkg
  demquery search "-105.01,39.70,-104.99,39.72" --footprints FESM_1m.gpkg
  demquery search region.wkt --footprints FESM_1m.gpkg --strategy identifier
  demquery decode USGS_1M_13_x50y440_CO_DRCOG_2020.tif
        """,
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--config", help="Provider configuration JSON file")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Products command
    products_parser = subparsers.add_parser("products", help="List candidate products")
    products_parser.add_argument("region", help="WKT, GeoJSON, west,south,east,north, or a file")
    products_parser.add_argument("--footprints", required=True, help="Footprint GeoPackage path")
    products_parser.add_argument("--layer", help="Footprint layer name")
    products_parser.add_argument(
        "--mode", choices=["filter", "scan"], default="filter", help="Lookup mode (default: filter)"
    )

    # Search command
    search_parser = subparsers.add_parser("search", help="List overlapping tiles")
    search_parser.add_argument("region", help="WKT, GeoJSON, west,south,east,north, or a file")
    search_parser.add_argument("--footprints", required=True, help="Footprint GeoPackage path")
    search_parser.add_argument("--layer", help="Footprint layer name")
    search_parser.add_argument(
        "--mode", choices=["filter", "scan"], default="filter", help="Lookup mode (default: filter)"
    )
    search_parser.add_argument(
        "--strategy",
        choices=["sidecar", "identifier"],
        default="sidecar",
        help="Tile extent strategy (default: sidecar)",
    )
    search_parser.add_argument(
        "--product-index", type=int, default=0, help="Candidate product to search (default: 0)"
    )
    search_parser.add_argument("--max-concurrency", type=int, help="Maximum concurrent tile fetches")
    search_parser.add_argument("--timeout", type=float, help="Per-tile timeout in seconds")

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Decode grid cells from tile names")
    decode_parser.add_argument("references", nargs="+", help="Tile references")

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(message)s" if not args.verbose else "%(levelname)s: %(message)s"
    )

    if args.command == "products":
        from demquery.cli.search import run_products

        return run_products(args)
    elif args.command == "search":
        from demquery.cli.search import run_search

        return run_search(args)
    elif args.command == "decode":
        from demquery.cli.decode import run_decode

        return run_decode(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
