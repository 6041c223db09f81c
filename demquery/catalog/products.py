"""
Product Footprint Catalog

Looks up elevation products whose recorded footprint intersects a query
region, using a GeoPackage of product footprints (e.g. FESM_1m.gpkg).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import geopandas as gpd
import pandas as pd
import pyogrio
from pyogrio.errors import DataLayerError, DataSourceError
from pyproj import CRS, Transformer

from demquery.core.config import DEFAULT_CONFIG, ProviderConfig
from demquery.core.exceptions import ProductLookupError, ValidationError
from demquery.query.spatial import QueryRegion

logger = logging.getLogger(__name__)

LOOKUP_MODES = ("filter", "scan")


@dataclass(frozen=True)
class ProductRecord:
    """
    One elevation product (a multi-tile survey)

    Attributes:
        product_link: Bucket listing link; its prefix locates the manifest
        metadata_link: Product metadata page
        publication_date: Publication date as recorded in the footprint dataset
        name: Project name
    """

    product_link: str
    metadata_link: str
    publication_date: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_link": self.product_link,
            "metadata_link": self.metadata_link,
            "publication_date": self.publication_date,
            "name": self.name,
        }

    @classmethod
    def from_row(cls, row: pd.Series, config: ProviderConfig = DEFAULT_CONFIG) -> "ProductRecord":
        return cls(
            product_link=_field_as_string(row[config.product_link_field]),
            metadata_link=_field_as_string(row[config.metadata_link_field]),
            publication_date=_field_as_string(row[config.date_field]),
            name=_field_as_string(row[config.name_field]),
        )


def _field_as_string(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    return str(value)


class FootprintCatalog:
    """
    Product footprint lookup backed by a vector dataset

    Two lookup modes yield the same products for a well-formed dataset:
    - "filter": bounding-box filter pushed down to the reader, then a
      vectorized intersects
    - "scan": reads every feature and tests each part of multi-part
      footprints individually

    Each product is reported at most once, in dataset order.

    Examples:
        >>> catalog = FootprintCatalog("FESM_1m.gpkg")
        >>> region = parse_region("-105.01,39.70,-104.99,39.72")
        >>> for product in catalog.find_candidates(region):
        ...     print(product.name, product.publication_date)
    """

    def __init__(
        self,
        path: str | Path,
        config: ProviderConfig = DEFAULT_CONFIG,
        layer: str | None = None,
        mode: str = "filter",
    ):
        if mode not in LOOKUP_MODES:
            raise ValidationError(f"Invalid lookup mode: {mode}. Must be one of {LOOKUP_MODES}")
        self.path = Path(path)
        self.config = config
        self.layer = layer
        self.mode = mode

    @property
    def required_fields(self) -> list[str]:
        return [
            self.config.product_link_field,
            self.config.metadata_link_field,
            self.config.date_field,
            self.config.name_field,
        ]

    def find_candidates(self, region: QueryRegion, mode: str | None = None) -> list[ProductRecord]:
        """
        Find products whose footprint intersects the region

        Args:
            region: Query region in EPSG:4326
            mode: Override the catalog's lookup mode ("filter" or "scan")

        Returns:
            Intersecting products; empty if none

        Raises:
            ProductLookupError: If the dataset cannot be read or lacks fields
        """
        mode = mode or self.mode
        if mode == "scan":
            products = self._scan(region)
        elif mode == "filter":
            products = self._filter(region)
        else:
            raise ValidationError(f"Invalid lookup mode: {mode}. Must be one of {LOOKUP_MODES}")

        logger.info("Found %d candidate products for %s (%s)", len(products), region.bounds, mode)
        return products

    def _scan(self, region: QueryRegion) -> list[ProductRecord]:
        gdf = self._read()
        products = []
        for _, row in gdf.iterrows():
            footprint = row.geometry
            if footprint is None or footprint.is_empty:
                continue
            # Multi-part footprints are tested part by part
            parts = getattr(footprint, "geoms", [footprint])
            if any(part.intersects(region.geometry) for part in parts):
                products.append(ProductRecord.from_row(row, self.config))
        return products

    def _filter(self, region: QueryRegion) -> list[ProductRecord]:
        gdf = self._read(bbox=region.bounds)
        if gdf.empty:
            return []
        gdf_filtered = gdf[gdf.intersects(region.geometry)]
        return [ProductRecord.from_row(row, self.config) for _, row in gdf_filtered.iterrows()]

    def _read(self, bbox: tuple[float, float, float, float] | None = None) -> gpd.GeoDataFrame:
        """Read footprints in EPSG:4326, optionally pre-filtered by a geographic bbox"""
        if not self.path.exists():
            raise ProductLookupError(f"Footprint dataset not found: {self.path}")

        try:
            if bbox is not None:
                bbox = self._bbox_in_dataset_crs(bbox)
            gdf = gpd.read_file(self.path, layer=self.layer, bbox=bbox)
        except (DataSourceError, DataLayerError, OSError, ValueError) as e:
            raise ProductLookupError(f"Cannot read footprint dataset {self.path}: {e}") from e

        missing = [name for name in self.required_fields if name not in gdf.columns]
        if missing:
            raise ProductLookupError(
                f"Footprint dataset {self.path} is missing fields: {', '.join(missing)}"
            )

        if gdf.crs is not None and gdf.crs.to_epsg() != 4326:
            gdf = gdf.to_crs(epsg=4326)
        return gdf

    def _bbox_in_dataset_crs(
        self, bbox: tuple[float, float, float, float]
    ) -> tuple[float, float, float, float]:
        """Reader bbox filters use the dataset's own CRS"""
        info = pyogrio.read_info(self.path, layer=self.layer)
        dataset_crs = info.get("crs")
        if not dataset_crs:
            return bbox
        crs = CRS.from_user_input(dataset_crs)
        if crs.to_epsg() == 4326:
            return bbox
        transformer = Transformer.from_crs("EPSG:4326", crs, always_xy=True)
        return transformer.transform_bounds(*bbox)
