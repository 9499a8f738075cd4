"""
Tests for module imports and package structure.

Ensures all public modules can be imported correctly.
"""


class TestPackageImports:
    """Test top-level package exports."""

    def test_version(self):
        import exposure_triangle

        assert exposure_triangle.__version__ == "1.0.0"

    def test_public_api(self):
        import exposure_triangle

        for name in exposure_triangle.__all__:
            assert hasattr(exposure_triangle, name), name

    def test_import_core(self):
        from exposure_triangle.core import (
            Axis,
            DiagnosticKind,
            ExposureError,
            Granularity,
            InvalidFormatError,
            ScaleError,
        )

        assert issubclass(InvalidFormatError, ExposureError)
        assert issubclass(ScaleError, ExposureError)
        assert Axis and DiagnosticKind and Granularity

    def test_import_exposure(self):
        from exposure_triangle import exposure

        for name in exposure.__all__:
            assert hasattr(exposure, name), name
