"""
Tests for exceptions
"""

import pytest

from demquery.core.exceptions import (
    DecodeError,
    DemQueryError,
    FetchError,
    InvalidGeometryError,
    ManifestError,
    ParseError,
    ProductLookupError,
    ProjectionError,
    TileResolutionError,
    ValidationError,
)


class TestExceptions:
    """Test exception hierarchy"""

    def test_base_exception(self):
        """Test DemQueryError"""
        with pytest.raises(DemQueryError):
            raise DemQueryError("Test error")

    @pytest.mark.parametrize(
        "exc_class",
        [ValidationError, InvalidGeometryError, ProjectionError, ManifestError, ProductLookupError],
    )
    def test_request_errors_inherit_base(self, exc_class):
        with pytest.raises(DemQueryError):
            raise exc_class("Request failed")

    @pytest.mark.parametrize("exc_class", [FetchError, ParseError, DecodeError])
    def test_tile_errors_share_base(self, exc_class):
        """Per-tile errors can be caught together"""
        with pytest.raises(TileResolutionError):
            raise exc_class("Tile failed")

    def test_request_errors_are_not_tile_errors(self):
        assert not issubclass(InvalidGeometryError, TileResolutionError)
        assert not issubclass(ProjectionError, TileResolutionError)
        assert not issubclass(ManifestError, TileResolutionError)

    def test_tile_error_keeps_reference(self):
        error = FetchError("404", reference="https://host/TIFF/a.tif")
        assert error.reference == "https://host/TIFF/a.tif"
        assert str(error) == "404"

    def test_exception_messages(self):
        """Test exception messages are preserved"""
        msg = "Custom error message"

        try:
            raise ProjectionError(msg)
        except ProjectionError as e:
            assert str(e) == msg
