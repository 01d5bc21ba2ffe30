"""Tests for ogrinfo report parsing."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from ogrinfo_validator.errors import UnsupportedProjectionError
from ogrinfo_validator.formats import VectorFormat
from ogrinfo_validator.report import (
    extract_feature_count,
    extract_field,
    parse_report,
    split_geocsv_srs,
    split_native_srs,
    srs_block,
    summary_text,
)

Loader = Callable[[str], str]


class TestExtractField:
    """Tests for extract_field function."""

    @pytest.mark.unit
    def test_reads_value_after_label(self, load_report: Loader) -> None:
        report = load_report("geojson_detail")

        assert extract_field(report, "Layer name") == "countries"
        assert extract_field(report, "Geometry") == "Multi Polygon"

    @pytest.mark.unit
    def test_label_is_case_insensitive(self) -> None:
        assert extract_field("LAYER NAME: roads\n", "Layer name") == "roads"

    @pytest.mark.unit
    def test_missing_label_is_none(self) -> None:
        assert extract_field("INFO: Open of `a.geojson'\n", "Extent") is None

    @pytest.mark.unit
    def test_label_must_start_line(self) -> None:
        assert extract_field("Old Layer name: x\n", "Layer name") is None

    @pytest.mark.unit
    def test_first_occurrence_wins(self) -> None:
        report = "Layer name: first\nLayer name: second\n"
        assert extract_field(report, "Layer name") == "first"


class TestFeatureCount:
    """Tests for extract_feature_count function."""

    @pytest.mark.unit
    def test_reads_count(self, load_report: Loader) -> None:
        assert extract_feature_count(load_report("bundle_detail")) == 1204

    @pytest.mark.unit
    def test_absent_count_is_none(self, load_report: Loader) -> None:
        assert extract_feature_count(load_report("geojson_summary")) is None


class TestSummaryText:
    """Tests for summary_text function."""

    @pytest.mark.unit
    def test_starts_at_driver_line_and_drops_ordinals(self, load_report: Loader) -> None:
        text = summary_text(load_report("geojson_summary"))
        assert text == "using driver `GeoJSON' successful. countries (Multi Polygon)"

    @pytest.mark.unit
    def test_multiple_layers_are_joined(self) -> None:
        report = (
            "INFO: Open of `a.gpkg'\n"
            "      using driver `GPKG' successful.\n"
            "1: roads (Line String)\n"
            "2: parcels (Polygon)\n"
        )
        assert summary_text(report) == (
            "using driver `GPKG' successful. roads (Line String) parcels (Polygon)"
        )

    @pytest.mark.unit
    def test_without_marker_keeps_whole_report(self) -> None:
        assert summary_text("\t1: roads\r\n") == "roads"


class TestSrsSplitting:
    """Tests for the SRS block helpers."""

    @pytest.mark.unit
    def test_srs_block_absent(self) -> None:
        assert srs_block("Layer name: a\n") == ""

    @pytest.mark.unit
    def test_native_split_at_last_bracket(self) -> None:
        srs, attributes = split_native_srs('GEOGCS["WGS 84",UNIT["degree",0.01]]\nNAME: String (0.0)')

        assert srs == 'GEOGCS["WGS 84",UNIT["degree",0.01]]'
        assert attributes == "NAME: String (0.0)"

    @pytest.mark.unit
    def test_native_without_brackets_is_all_srs(self) -> None:
        assert split_native_srs("(unknown)") == ("(unknown)", "")

    @pytest.mark.unit
    def test_geocsv_split(self) -> None:
        assert split_geocsv_srs("(unknown)\nname: String (0.0)") == (
            "(unknown)",
            "name: String (0.0)",
        )

    @pytest.mark.unit
    def test_geocsv_without_unknown_marker(self) -> None:
        assert split_geocsv_srs("name: String (0.0)") == ("(unknown)", "name: String (0.0)")


class TestParseReport:
    """Tests for parse_report function."""

    @pytest.mark.unit
    def test_summary_mode(self, load_report: Loader) -> None:
        metadata = parse_report(load_report("geojson_summary"), VectorFormat.GEOJSON, detail=False)

        assert metadata.info == "using driver `GeoJSON' successful. countries (Multi Polygon)"
        assert not metadata.detail

    @pytest.mark.unit
    def test_geojson_detail(self, load_report: Loader) -> None:
        metadata = parse_report(load_report("geojson_detail"), VectorFormat.GEOJSON, detail=True)

        assert metadata.layer_name == "countries"
        assert metadata.extent == "(-180.000000, -90.000000) - (180.000000, 83.634101)"
        assert metadata.spatial_reference.startswith('GEOGCRS["WGS 84",')
        assert metadata.spatial_reference.endswith('ID["EPSG",4326]]')
        assert metadata.attribute_block == (
            "Data axis to CRS axis mapping: 2,1\nADMIN: String (0.0)\nISO_A3: String (0.0)"
        )
        assert metadata.feature_count is None

    @pytest.mark.unit
    def test_bundle_detail(self, load_report: Loader) -> None:
        metadata = parse_report(
            load_report("bundle_detail"), VectorFormat.SHAPEFILE_BUNDLE, detail=True
        )

        assert metadata.layer_name == "weather2015"
        assert metadata.geometry == "Point"
        assert metadata.spatial_reference.startswith('GEOGCS["GCS_WGS_1984"')
        assert metadata.attribute_block == "STATION: String (12.0)\nTEMP: Real (8.2)"

    @pytest.mark.unit
    def test_geocsv_detail(self, load_report: Loader) -> None:
        metadata = parse_report(load_report("geocsv_detail"), VectorFormat.GEOCSV, detail=True)

        assert metadata.layer_name == "lon"
        assert metadata.spatial_reference == "(unknown)"
        assert metadata.attribute_block == "name: String (0.0)\npopulation: String (0.0)"

    @pytest.mark.unit
    def test_projected_native_source_is_rejected(self, load_report: Loader) -> None:
        with pytest.raises(UnsupportedProjectionError) as exc_info:
            parse_report(load_report("projected_detail"), VectorFormat.SHAPEFILE_BUNDLE, detail=True)

        assert exc_info.value.context["token"] == "PROJECTION"

    @pytest.mark.unit
    def test_wkt2_projected_crs_is_rejected(self) -> None:
        report = 'Layer name: a\nLayer SRS WKT:\nPROJCRS["WGS 84 / UTM zone 33N"]\nID: Integer (10.0)\n'

        with pytest.raises(UnsupportedProjectionError):
            parse_report(report, VectorFormat.OTHER, detail=True)

    @pytest.mark.unit
    def test_projection_in_attribute_names_is_ignored(self) -> None:
        report = 'Layer name: a\nLayer SRS WKT:\nGEOGCS["WGS 84"]\nPROJECTION_ID: Integer (10.0)\n'

        metadata = parse_report(report, VectorFormat.GEOJSON, detail=True)
        assert metadata.attribute_block == "PROJECTION_ID: Integer (10.0)"

    @pytest.mark.unit
    def test_geocsv_is_not_checked_for_projection(self) -> None:
        report = "Layer name: lon\nLayer SRS WKT:\n(unknown)\nPROJECTION: String (0.0)\n"

        metadata = parse_report(report, VectorFormat.GEOCSV, detail=True)
        assert metadata.spatial_reference == "(unknown)"

    @pytest.mark.unit
    def test_missing_labels_are_none(self) -> None:
        metadata = parse_report("INFO: nothing here\n", VectorFormat.OTHER, detail=True)

        assert metadata.layer_name is None
        assert metadata.geometry is None
        assert metadata.extent is None
        assert metadata.spatial_reference == ""
