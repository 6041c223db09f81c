"""
DemQuery Pipeline Module

Concurrent tile extent resolution and overlap filtering.
"""

from demquery.pipeline.overlap import OverlapPipeline, resolve_overlaps
from demquery.pipeline.resolvers import (
    STRATEGIES,
    IdentifierExtentResolver,
    SidecarExtentResolver,
    create_resolver,
)

__all__ = [
    "STRATEGIES",
    "IdentifierExtentResolver",
    "OverlapPipeline",
    "SidecarExtentResolver",
    "create_resolver",
    "resolve_overlaps",
]
