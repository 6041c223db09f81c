"""
DemQuery Catalog Module

Candidate product lookup against a footprint dataset.
"""

from demquery.catalog.products import LOOKUP_MODES, FootprintCatalog, ProductRecord

__all__ = [
    "LOOKUP_MODES",
    "FootprintCatalog",
    "ProductRecord",
]
