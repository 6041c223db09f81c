"""
DemQuery Test Configuration

Shared pytest fixtures for all tests.
"""

import httpx
import pytest
from shapely.geometry import MultiPolygon, box

# Small region in Denver, CO (UTM zone 13N, near the central meridian)
DENVER_BBOX = (-105.01, 39.70, -104.99, 39.72)

BUCKET = "https://prd-tnm.s3.amazonaws.com"
PROJECT_PREFIX = "StagedProducts/Elevation/1m/Projects/CO_DRCOG_2020"
TIFF_DIR = f"{BUCKET}/{PROJECT_PREFIX}/TIFF"


def sidecar_xml(west, east, north, south) -> str:
    """Minimal FGDC-style metadata document with bounding coordinates"""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <idinfo>
    <citation><citeinfo><title>USGS 1 Meter DEM</title></citeinfo></citation>
    <spdom>
      <bounding>
        <westbc>{west}</westbc>
        <eastbc>{east}</eastbc>
        <northbc>{north}</northbc>
        <southbc>{south}</southbc>
      </bounding>
    </spdom>
  </idinfo>
</metadata>
"""


def tile_url(name: str) -> str:
    return f"{TIFF_DIR}/{name}.tif"


@pytest.fixture
def denver_bbox():
    return DENVER_BBOX


@pytest.fixture
def sidecar_documents():
    """Sidecar documents keyed by tile name, relative to DENVER_BBOX"""
    return {
        # overlaps the west half of the region
        "USGS_1M_13_x49y440_CO_DRCOG_2020": sidecar_xml(-105.02, -105.00, 39.71, 39.69),
        # shares only the region's north-east corner
        "USGS_1M_13_x50y440_CO_DRCOG_2020": sidecar_xml(-104.99, -104.90, 39.80, 39.72),
        # far to the east
        "USGS_1M_13_x52y440_CO_DRCOG_2020": sidecar_xml(-104.80, -104.70, 39.80, 39.70),
    }


@pytest.fixture
def sidecar_transport(sidecar_documents):
    """MockTransport serving sidecar documents; unknown documents return 404"""
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        name = request.url.path.rsplit("/", 1)[-1].removesuffix(".xml")
        if "/metadata/" in request.url.path and name in sidecar_documents:
            return httpx.Response(200, text=sidecar_documents[name])
        return httpx.Response(404, text="Not Found")

    transport = httpx.MockTransport(handler)
    transport.requested = requested
    return transport


@pytest.fixture
def footprints_gdf():
    """Product footprints: two intersect DENVER_BBOX, one does not"""
    import geopandas as gpd

    records = [
        {
            "project": "CO_DRCOG_2020",
            "product_link": f"prd-tnm.s3.amazonaws.com/index.html?prefix={PROJECT_PREFIX}/",
            "metadata_link": "https://www.sciencebase.gov/catalog/item/co_drcog_2020",
            "pub_date": "2020-06-01",
            "geometry": MultiPolygon([box(-105.1, 39.6, -104.9, 39.8)]),
        },
        {
            "project": "CO_Split_2019",
            "product_link": "prd-tnm.s3.amazonaws.com/index.html?prefix=StagedProducts/Elevation/1m/Projects/CO_Split_2019/",
            "metadata_link": "https://www.sciencebase.gov/catalog/item/co_split_2019",
            "pub_date": "2019-03-15",
            # second part touches the region's south-east corner
            "geometry": MultiPolygon([box(-106.0, 40.5, -105.9, 40.6), box(-104.99, 39.6, -104.9, 39.70)]),
        },
        {
            "project": "UT_Far_2021",
            "product_link": "prd-tnm.s3.amazonaws.com/index.html?prefix=StagedProducts/Elevation/1m/Projects/UT_Far_2021/",
            "metadata_link": "https://www.sciencebase.gov/catalog/item/ut_far_2021",
            "pub_date": "2021-01-20",
            "geometry": MultiPolygon([box(-112.0, 40.0, -111.5, 40.5)]),
        },
    ]
    return gpd.GeoDataFrame(records, crs="EPSG:4326")


@pytest.fixture
def footprints_gpkg(tmp_path, footprints_gdf):
    """Footprint GeoPackage written to a temporary directory"""
    path = tmp_path / "FESM_1m.gpkg"
    footprints_gdf.to_file(path, driver="GPKG")
    return path


@pytest.fixture
def make_sidecar():
    return sidecar_xml


@pytest.fixture
def make_tile_url():
    return tile_url


@pytest.fixture
def project_prefix():
    return PROJECT_PREFIX
