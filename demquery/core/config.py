"""
Provider configuration.

Every convention of the external elevation data provider (base locations,
manifest file name, path rewrites, tag names, tile naming grid) is a named
value here instead of an inline literal.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from demquery.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderConfig:
    """
    Named conventions and limits for one elevation data provider.

    Attributes:
        staged_products_base_url: Base location manifests are published under
        manifest_filename: File name of a product's tile manifest
        tile_path_segment: Path segment holding raster tiles
        sidecar_path_segment: Path segment holding per-tile metadata documents
        tile_extension: File extension of raster tiles
        sidecar_extension: File extension of metadata documents
        west_tag, east_tag, north_tag, south_tag: Sidecar bound tag names
        identifier_pattern: Regex locating the grid cell in a tile reference
        grid_x_divisor: Projected X units per grid unit
        grid_y_divisor: Projected Y units per grid unit
        y_decimal_scale: Extra precision encoded in the raw y value
        tile_span_x, tile_span_y: Tile size in grid units
        product_link_field, metadata_link_field, date_field, name_field:
            Footprint dataset attribute names
        max_concurrency: Maximum tile resolutions in flight at once
        tile_timeout: Seconds allowed for one tile resolution
        request_timeout: HTTP client timeout in seconds

    Examples:
        >>> config = ProviderConfig(max_concurrency=8)
        >>> config.manifest_filename
        '0_file_download_links.txt'
    """

    staged_products_base_url: str = "https://prd-tnm.s3.amazonaws.com/"
    manifest_filename: str = "0_file_download_links.txt"
    tile_path_segment: str = "/TIFF/"
    sidecar_path_segment: str = "/metadata/"
    tile_extension: str = ".tif"
    sidecar_extension: str = ".xml"
    west_tag: str = "westbc"
    east_tag: str = "eastbc"
    north_tag: str = "northbc"
    south_tag: str = "southbc"
    identifier_pattern: str = r"x(\d+)y(\d+)"
    grid_x_divisor: float = 10_000.0
    grid_y_divisor: float = 100_000.0
    y_decimal_scale: float = 10.0
    tile_span_x: float = 1.0
    tile_span_y: float = 0.1
    product_link_field: str = "product_link"
    metadata_link_field: str = "metadata_link"
    date_field: str = "pub_date"
    name_field: str = "project"
    max_concurrency: int = 32
    tile_timeout: float = 30.0
    request_timeout: float = 30.0

    def __post_init__(self):
        if self.max_concurrency < 1:
            raise ValidationError(f"max_concurrency must be >= 1, got {self.max_concurrency}")
        if self.tile_timeout <= 0 or self.request_timeout <= 0:
            raise ValidationError("Timeouts must be positive")
        if self.grid_x_divisor <= 0 or self.grid_y_divisor <= 0 or self.y_decimal_scale <= 0:
            raise ValidationError("Grid divisors must be positive")

    @property
    def bound_tags(self) -> dict[str, str]:
        """Sidecar tag name for each bound."""
        return {
            "west": self.west_tag,
            "east": self.east_tag,
            "north": self.north_tag,
            "south": self.south_tag,
        }

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def replace(self, **changes: Any) -> "ProviderConfig":
        """Copy with some values changed; None values are ignored."""
        data = self.to_dict()
        data.update({k: v for k, v in changes.items() if v is not None})
        return ProviderConfig.from_dict(data)


DEFAULT_CONFIG = ProviderConfig()


def load_config(path: str | Path) -> ProviderConfig:
    """
    Load a ProviderConfig from a JSON file.

    Keys not present in the file keep their defaults.

    Raises:
        ValidationError: If the file is not a JSON object or has unknown keys
    """
    config_path = Path(path)
    try:
        with open(config_path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValidationError(f"Cannot read configuration {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Configuration must be a JSON object: {config_path}")

    logger.debug("Loaded provider configuration from %s", config_path)
    return ProviderConfig.from_dict(data)
