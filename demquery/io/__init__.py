"""DemQuery I/O: product manifests and tile metadata sidecars."""

from demquery.io.manifest import HttpManifestProvider, manifest_url, split_manifest
from demquery.io.sidecar import fetch_sidecar_extent, parse_sidecar_bounds, sidecar_url

__all__ = [
    "HttpManifestProvider",
    "fetch_sidecar_extent",
    "manifest_url",
    "parse_sidecar_bounds",
    "sidecar_url",
    "split_manifest",
]
