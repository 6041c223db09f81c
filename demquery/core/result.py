"""
Overlap results

Typed per-tile outcomes and the summary returned by an overlap search.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from demquery.query.spatial import TileExtent

if TYPE_CHECKING:
    from demquery.catalog.products import ProductRecord


@dataclass(frozen=True)
class TileOutcome:
    """
    Result of resolving and testing one tile reference

    Exactly one of ``extent`` and ``error`` is set.
    """

    reference: str
    extent: TileExtent | None = None
    intersects: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class OverlapResult:
    """Result of an overlap search."""

    tiles: list[str]
    outcomes: list[TileOutcome] = field(default_factory=list)
    strategy: str = ""
    elapsed: float = 0.0
    product: "ProductRecord | None" = None

    @property
    def failures(self) -> dict[str, str]:
        """Tile reference -> error message for every tile that failed to resolve"""
        return {o.reference: str(o.error) for o in self.outcomes if not o.ok}

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    def __len__(self):
        return len(self.tiles)

    def __repr__(self):
        status = f"{len(self.tiles)} of {len(self.outcomes)} tiles overlap ({self.strategy}) in {self.elapsed:.1f}s"
        if self.failed_count:
            status += f" ({self.failed_count} failed)"
        return f"<OverlapResult: {status}>"
